"""Cleanup obsolete embeddings use case."""

from uuid import UUID

from wikirag.config import Settings
from wikirag.log import get_logger

logger = get_logger(__name__)


class CleanupObsoleteEmbeddingsUseCase:
    """Delete embeddings built with a model other than the active one."""

    def __init__(self, settings: Settings, unit_of_work_factory: type) -> None:
        self._settings = settings
        self._uow_factory = unit_of_work_factory

    async def execute(self, team_id: UUID | None = None) -> int:
        """Returns number of rows deleted."""
        model_id = self._settings.embedding_model
        async with self._uow_factory() as uow:
            deleted = await uow.embeddings.delete_obsolete(model_id, team_id=team_id)

        logger.info("Cleaned up %d obsolete embeddings (model != %s)", deleted, model_id)
        return deleted
