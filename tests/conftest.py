"""Pytest fixtures for wikirag tests."""

from __future__ import annotations

import math
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from uuid import UUID, uuid4

import pytest

from wikirag.application.dto.search_dto import KeywordHit, SearchResult, SearchScope
from wikirag.config import Settings
from wikirag.domain.entities import Document, DocumentEmbedding, User


def cosine_similarity(a: list[float], b: list[float]) -> float:
    dot = sum(x * y for x, y in zip(a, b, strict=True))
    norm = math.sqrt(sum(x * x for x in a)) * math.sqrt(sum(y * y for y in b))
    return dot / norm if norm else 0.0


def make_document(
    *,
    team_id: UUID,
    collection_id: UUID | None = None,
    text: str = "",
    version: int = 1,
    title: str = "Doc",
    published: bool = True,
    deleted: bool = False,
    archived: bool = False,
) -> Document:
    now = datetime.now(UTC)
    return Document(
        id=uuid4(),
        team_id=team_id,
        collection_id=collection_id,
        title=title,
        text=text,
        version=version,
        published_at=now if published else None,
        deleted_at=now if deleted else None,
        archived_at=now if archived else None,
    )


# --- Fake repositories ---


class FakeDocumentRepository:
    """In-memory document repository."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, Document] = {}
        self.keyword_hits: list[KeywordHit] = []

    def add(self, document: Document) -> Document:
        self._by_id[document.id] = document
        return document

    async def get_by_id(self, document_id: UUID) -> Document | None:
        return self._by_id.get(document_id)

    async def list_searchable_ids(self, team_id: UUID) -> list[UUID]:
        return sorted(
            d.id for d in self._by_id.values() if d.team_id == team_id and d.is_searchable
        )

    async def search_text(
        self,
        *,
        team_id: UUID,
        user_id: UUID,
        collection_ids: list[UUID],
        query: str,
        limit: int = 10,
    ) -> list[KeywordHit]:
        return self.keyword_hits[:limit]


class FakeUserRepository:
    """In-memory user repository with per-user readable collections."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, User] = {}
        self._collections: dict[UUID, list[UUID]] = {}
        self.document_memberships: set[tuple[UUID, UUID]] = set()  # (user_id, document_id)

    def add(self, user: User, collection_ids: list[UUID] | None = None) -> User:
        self._by_id[user.id] = user
        self._collections[user.id] = list(collection_ids or [])
        return user

    async def get_by_id(self, user_id: UUID) -> User | None:
        return self._by_id.get(user_id)

    async def collection_ids(self, user_id: UUID, team_id: UUID) -> list[UUID]:
        return list(self._collections.get(user_id, []))

    async def has_document_membership(self, user_id: UUID, document_id: UUID) -> bool:
        return (user_id, document_id) in self.document_memberships


class FakeEmbeddingRepository:
    """In-memory embedding repository; nearest() computes real cosine similarity."""

    def __init__(
        self, documents: FakeDocumentRepository, document_memberships: set[tuple[UUID, UUID]]
    ) -> None:
        self._documents = documents
        self.rows: list[DocumentEmbedding] = []
        self.document_memberships = document_memberships  # (user_id, document_id)

    async def replace_for_document(
        self, document_id: UUID, model_id: str, embeddings: list[DocumentEmbedding]
    ) -> None:
        self.rows = [
            r for r in self.rows if not (r.document_id == document_id and r.model_id == model_id)
        ]
        keys = {(e.document_id, e.chunk_index, e.model_id) for e in embeddings}
        if len(keys) != len(embeddings):
            raise AssertionError("duplicate (document_id, chunk_index, model_id)")
        self.rows.extend(embeddings)

    async def latest_version(self, document_id: UUID, model_id: str) -> int | None:
        versions = [
            r.document_version
            for r in self.rows
            if r.document_id == document_id and r.model_id == model_id
        ]
        return max(versions) if versions else None

    async def delete_for_document(self, document_id: UUID, model_id: str) -> int:
        before = len(self.rows)
        self.rows = [
            r for r in self.rows if not (r.document_id == document_id and r.model_id == model_id)
        ]
        return before - len(self.rows)

    async def delete_obsolete(self, active_model_id: str, team_id: UUID | None = None) -> int:
        before = len(self.rows)
        self.rows = [
            r
            for r in self.rows
            if r.model_id == active_model_id or (team_id is not None and r.team_id != team_id)
        ]
        return before - len(self.rows)

    def _readable(self, document: Document, scope: SearchScope) -> bool:
        if not document.is_searchable:
            return False
        if scope.collection_id is not None and document.collection_id != scope.collection_id:
            return False
        if scope.document_id is not None and document.id != scope.document_id:
            return False
        return (
            document.collection_id in scope.collection_ids
            or (scope.user_id, document.id) in self.document_memberships
        )

    async def nearest(
        self,
        query_embedding: list[float],
        scope: SearchScope,
        limit: int = 10,
        threshold: float = 0.7,
    ) -> list[SearchResult]:
        results = []
        for r in self.rows:
            if r.team_id != scope.team_id or r.model_id != scope.model_id:
                continue
            document = self._documents._by_id.get(r.document_id)
            if document is None or not self._readable(document, scope):
                continue
            score = cosine_similarity(r.embedding, query_embedding)
            if score <= threshold:
                continue
            results.append(
                SearchResult(
                    id=str(r.id),
                    document_id=r.document_id,
                    title=document.title,
                    collection_id=document.collection_id,
                    score=score,
                    context=r.context,
                    chunk_index=r.chunk_index,
                )
            )
        results.sort(key=lambda x: x.score, reverse=True)
        return results[:limit]


# --- Fake UnitOfWork ---


class FakeUnitOfWork:
    """In-memory Unit of Work with fake repositories."""

    def __init__(self) -> None:
        self.documents = FakeDocumentRepository()
        self.users = FakeUserRepository()
        self.embeddings = FakeEmbeddingRepository(self.documents, self.users.document_memberships)
        self.commits = 0
        self.rollbacks = 0

    async def commit(self) -> None:
        self.commits += 1

    async def rollback(self) -> None:
        self.rollbacks += 1


def make_uow_factory(uow: FakeUnitOfWork):
    """Factory yielding the same FakeUnitOfWork, committing on success like the real one."""

    @asynccontextmanager
    async def factory() -> AsyncIterator[FakeUnitOfWork]:
        try:
            yield uow
            await uow.commit()
        except BaseException:
            await uow.rollback()
            raise

    return factory


class FakeEmbeddingProvider:
    """Deterministic embeddings: explicit vectors per text, else a constant vector."""

    def __init__(self, vectors: dict[str, list[float]] | None = None, dimension: int = 4) -> None:
        self.vectors = vectors or {}
        self.dimension = dimension
        self.embed_calls: list[list[str]] = []
        self.embed_one_calls: list[str] = []
        self.error: Exception | None = None

    def _vector(self, text: str) -> list[float]:
        return list(self.vectors.get(text, [1.0] + [0.0] * (self.dimension - 1)))

    async def embed(self, texts: list[str]) -> list[list[float]]:
        self.embed_calls.append(list(texts))
        if self.error:
            raise self.error
        return [self._vector(t) for t in texts]

    async def embed_one(self, text: str) -> list[float]:
        self.embed_one_calls.append(text)
        if self.error:
            raise self.error
        return self._vector(text)


class RecordingScheduler:
    """TaskScheduler that records scheduled tasks."""

    def __init__(self) -> None:
        self.scheduled: list[tuple[str, dict]] = []

    async def schedule(self, name: str, payload: dict) -> None:
        self.scheduled.append((name, payload))




# --- Fixtures ---


@pytest.fixture
def settings() -> Settings:
    """Enabled settings with a test endpoint and model m1."""
    return Settings(
        _env_file=None,
        enabled=True,
        litellm_base_url="http://litellm.test",
        litellm_api_key="test-key",
        embedding_model="m1",
        embedding_dimension=4,
        chunk_size=500,
        chunk_overlap=50,
    )


@pytest.fixture
def disabled_settings() -> Settings:
    return Settings(_env_file=None, enabled=False, embedding_model="m1")


@pytest.fixture
def fake_uow() -> FakeUnitOfWork:
    """Fresh in-memory UnitOfWork for each test."""
    return FakeUnitOfWork()


@pytest.fixture
def uow_factory(fake_uow: FakeUnitOfWork):
    """Factory returning async context manager yielding ``fake_uow``."""
    return make_uow_factory(fake_uow)


@pytest.fixture
def embedding_provider() -> FakeEmbeddingProvider:
    return FakeEmbeddingProvider()


@pytest.fixture
def scheduler() -> RecordingScheduler:
    return RecordingScheduler()


@pytest.fixture
def team_id() -> UUID:
    return uuid4()


@pytest.fixture
def collection_id() -> UUID:
    return uuid4()


@pytest.fixture
def user(fake_uow: FakeUnitOfWork, team_id: UUID, collection_id: UUID) -> User:
    """User of ``team_id`` who can read ``collection_id``."""
    return fake_uow.users.add(
        User(id=uuid4(), team_id=team_id, name="Alice"), collection_ids=[collection_id]
    )


@pytest.fixture
def long_text() -> str:
    """About 5000 characters of prose."""
    return "word " * 1000
