"""Unit tests for bulk indexing and obsolete-model cleanup."""

from uuid import uuid4

import pytest

from wikirag.application.task_names import GENERATE_DOCUMENT_EMBEDDINGS
from wikirag.application.use_cases.embedding.bulk_index import BulkIndexDocumentsUseCase
from wikirag.application.use_cases.embedding.cleanup_obsolete import (
    CleanupObsoleteEmbeddingsUseCase,
)
from wikirag.config import Settings
from wikirag.domain.entities import DocumentEmbedding

from tests.conftest import make_document


def _row(team_id, model_id: str) -> DocumentEmbedding:
    return DocumentEmbedding(
        id=uuid4(),
        document_id=uuid4(),
        team_id=team_id,
        model_id=model_id,
        document_version=1,
        chunk_index=0,
        context="text",
        embedding=[1.0, 0.0],
    )


@pytest.mark.asyncio
async def test_bulk_index_schedules_searchable_documents(settings, uow_factory, fake_uow, scheduler, team_id) -> None:
    live = fake_uow.documents.add(make_document(team_id=team_id))
    fake_uow.documents.add(make_document(team_id=team_id, published=False))
    fake_uow.documents.add(make_document(team_id=team_id, archived=True))
    fake_uow.documents.add(make_document(team_id=team_id, deleted=True))
    fake_uow.documents.add(make_document(team_id=uuid4()))

    use_case = BulkIndexDocumentsUseCase(settings, uow_factory, scheduler)
    count = await use_case.execute(team_id, force=True)

    assert count == 1
    assert scheduler.scheduled == [
        (GENERATE_DOCUMENT_EMBEDDINGS, {"document_id": str(live.id), "force": True})
    ]


@pytest.mark.asyncio
async def test_bulk_index_disabled_schedules_nothing(disabled_settings, uow_factory, fake_uow, scheduler, team_id) -> None:
    fake_uow.documents.add(make_document(team_id=team_id))
    use_case = BulkIndexDocumentsUseCase(disabled_settings, uow_factory, scheduler)
    assert await use_case.execute(team_id) == 0
    assert scheduler.scheduled == []


@pytest.mark.asyncio
async def test_cleanup_deletes_rows_of_inactive_models(uow_factory, fake_uow, team_id) -> None:
    """After switching m1 -> m2 only the m1 rows go."""
    old = [_row(team_id, "m1") for _ in range(3)]
    new = [_row(team_id, "m2") for _ in range(2)]
    fake_uow.embeddings.rows.extend(old + new)

    settings = Settings(_env_file=None, enabled=True, embedding_model="m2")
    deleted = await CleanupObsoleteEmbeddingsUseCase(settings, uow_factory).execute()

    assert deleted == 3
    assert fake_uow.embeddings.rows == new


@pytest.mark.asyncio
async def test_cleanup_restricted_to_team(uow_factory, fake_uow, team_id) -> None:
    other_team = uuid4()
    mine, theirs = _row(team_id, "m1"), _row(other_team, "m1")
    fake_uow.embeddings.rows.extend([mine, theirs])

    settings = Settings(_env_file=None, embedding_model="m2")
    deleted = await CleanupObsoleteEmbeddingsUseCase(settings, uow_factory).execute(team_id)

    assert deleted == 1
    assert fake_uow.embeddings.rows == [theirs]
