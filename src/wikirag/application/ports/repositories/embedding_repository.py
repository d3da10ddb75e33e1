"""Embedding repository port - versioned per-chunk vectors and k-NN search."""

from typing import Protocol
from uuid import UUID

from wikirag.application.dto.search_dto import SearchResult, SearchScope
from wikirag.domain.entities import DocumentEmbedding


class EmbeddingRepository(Protocol):
    """Port for embedding persistence and nearest-neighbour search."""

    async def replace_for_document(
        self, document_id: UUID, model_id: str, embeddings: list[DocumentEmbedding]
    ) -> None: ...

    async def latest_version(self, document_id: UUID, model_id: str) -> int | None: ...

    async def delete_for_document(self, document_id: UUID, model_id: str) -> int: ...

    async def delete_obsolete(self, active_model_id: str, team_id: UUID | None = None) -> int: ...

    async def nearest(
        self,
        query_embedding: list[float],
        scope: SearchScope,
        limit: int = 10,
        threshold: float = 0.7,
    ) -> list[SearchResult]: ...
