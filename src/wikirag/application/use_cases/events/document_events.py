"""Document change notifier - maps document events to embedding tasks.

Called by the handle_document_event task, which the wiki's event processor
enqueues for every document change.
"""

from typing import assert_never
from uuid import UUID

from wikirag.application.ports import TaskScheduler
from wikirag.application.task_names import GENERATE_DOCUMENT_EMBEDDINGS
from wikirag.config import Settings
from wikirag.domain.value_objects import DocumentEventKind


async def handle_document_event(
    settings: Settings,
    scheduler: TaskScheduler,
    kind: DocumentEventKind,
    document_id: UUID,
) -> bool:
    """Schedule embedding generation for a document change. Returns True if scheduled."""
    if not settings.enabled:
        return False

    match kind:
        case DocumentEventKind.CREATED | DocumentEventKind.UPDATED | DocumentEventKind.PUBLISHED:
            await scheduler.schedule(
                GENERATE_DOCUMENT_EMBEDDINGS, {"document_id": str(document_id)}
            )
            return True
        case DocumentEventKind.DELETED:
            # Rows cascade with the document; nothing to schedule.
            return False
        case _:
            assert_never(kind)
