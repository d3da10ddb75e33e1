"""Bulk index documents use case."""

from uuid import UUID

from wikirag.application.ports import TaskScheduler
from wikirag.application.task_names import GENERATE_DOCUMENT_EMBEDDINGS
from wikirag.config import Settings
from wikirag.log import get_logger

logger = get_logger(__name__)


class BulkIndexDocumentsUseCase:
    """Schedule embedding generation for every searchable document of a team."""

    def __init__(
        self,
        settings: Settings,
        unit_of_work_factory: type,
        scheduler: TaskScheduler,
    ) -> None:
        self._settings = settings
        self._uow_factory = unit_of_work_factory
        self._scheduler = scheduler

    async def execute(self, team_id: UUID, force: bool = False) -> int:
        """Returns number of documents scheduled."""
        if not self._settings.enabled:
            return 0

        async with self._uow_factory() as uow:
            document_ids = await uow.documents.list_searchable_ids(team_id)

        logger.info("Bulk indexing %d documents for team %s", len(document_ids), team_id)

        for document_id in document_ids:
            await self._scheduler.schedule(
                GENERATE_DOCUMENT_EMBEDDINGS, {"document_id": str(document_id), "force": force}
            )
        return len(document_ids)
