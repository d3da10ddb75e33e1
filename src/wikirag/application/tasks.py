"""Background tasks as plain functions in a dispatch table.

Each task takes a JSON-compatible payload. Errors propagate so the queue can
retry (delivery is at-least-once; every task is idempotent).
"""

import functools
import time
from collections.abc import Awaitable, Callable
from typing import Any
from uuid import UUID

from wikirag.application.ports import TaskScheduler
from wikirag.application.task_names import (
    BULK_INDEX_DOCUMENTS,
    CLEANUP_OBSOLETE_EMBEDDINGS,
    GENERATE_DOCUMENT_EMBEDDINGS,
    HANDLE_DOCUMENT_EVENT,
)
from wikirag.application.use_cases.embedding.bulk_index import BulkIndexDocumentsUseCase
from wikirag.application.use_cases.embedding.cleanup_obsolete import (
    CleanupObsoleteEmbeddingsUseCase,
)
from wikirag.application.use_cases.embedding.generate_embeddings import (
    GenerateDocumentEmbeddingsUseCase,
)
from wikirag.application.use_cases.events.document_events import handle_document_event
from wikirag.config import Settings
from wikirag.domain.exceptions import NotFound, ValidationError
from wikirag.domain.value_objects import DocumentEventKind
from wikirag.log import get_logger

logger = get_logger(__name__)

TaskHandler = Callable[[dict[str, Any]], Awaitable[Any]]
TaskTable = dict[str, TaskHandler]


def rag_task(
    name: str, settings: Settings, *, requires_enabled: bool = True
) -> Callable[[TaskHandler], TaskHandler]:
    """Wrap a task with the enable-check and start/finish/failure logging."""

    def decorator(fn: TaskHandler) -> TaskHandler:
        @functools.wraps(fn)
        async def wrapper(payload: dict[str, Any]) -> Any:
            if requires_enabled and not settings.enabled:
                logger.debug("Task %s skipped: RAG is not enabled", name)
                return None
            started = time.perf_counter()
            logger.info("Task %s started: %s", name, payload)
            try:
                result = await fn(payload)
            except Exception:
                logger.exception(
                    "Task %s failed after %.2fs", name, time.perf_counter() - started
                )
                raise
            logger.info("Task %s finished in %.2fs", name, time.perf_counter() - started)
            return result

        return wrapper

    return decorator


def _uuid(payload: dict[str, Any], key: str, required: bool = True) -> UUID | None:
    value = payload.get(key)
    if value is None:
        if required:
            raise ValidationError(f"Task payload is missing '{key}'")
        return None
    try:
        return value if isinstance(value, UUID) else UUID(str(value))
    except ValueError as e:
        raise ValidationError(f"Task payload '{key}' is not a UUID: {value!r}") from e


def _flag(payload: dict[str, Any], key: str) -> bool:
    value = payload.get(key, False)
    if not isinstance(value, bool):
        raise ValidationError(f"Task payload '{key}' must be a boolean: {value!r}")
    return value


def _event_kind(payload: dict[str, Any]) -> DocumentEventKind:
    value = payload.get("event")
    try:
        return DocumentEventKind(value)
    except ValueError as e:
        raise ValidationError(f"Task payload 'event' is not a document event: {value!r}") from e


def build_task_table(
    settings: Settings,
    generate_embeddings: GenerateDocumentEmbeddingsUseCase,
    bulk_index: BulkIndexDocumentsUseCase,
    cleanup_obsolete: CleanupObsoleteEmbeddingsUseCase,
    scheduler: TaskScheduler,
) -> TaskTable:
    """Build the name -> task mapping."""

    @rag_task(GENERATE_DOCUMENT_EMBEDDINGS, settings)
    async def generate_document_embeddings(payload: dict[str, Any]) -> Any:
        return await generate_embeddings.execute(
            _uuid(payload, "document_id"), force=_flag(payload, "force")
        )

    @rag_task(BULK_INDEX_DOCUMENTS, settings)
    async def bulk_index_documents(payload: dict[str, Any]) -> Any:
        return await bulk_index.execute(
            _uuid(payload, "team_id"), force=_flag(payload, "force")
        )

    # Reclaiming old-model rows is safe with RAG switched off.
    @rag_task(CLEANUP_OBSOLETE_EMBEDDINGS, settings, requires_enabled=False)
    async def cleanup_obsolete_embeddings(payload: dict[str, Any]) -> Any:
        return await cleanup_obsolete.execute(_uuid(payload, "team_id", required=False))

    # Entry point for the wiki's document change events, delivered via the queue.
    @rag_task(HANDLE_DOCUMENT_EVENT, settings)
    async def handle_document_event_task(payload: dict[str, Any]) -> Any:
        return await handle_document_event(
            settings, scheduler, _event_kind(payload), _uuid(payload, "document_id")
        )

    return {
        GENERATE_DOCUMENT_EMBEDDINGS: generate_document_embeddings,
        BULK_INDEX_DOCUMENTS: bulk_index_documents,
        CLEANUP_OBSOLETE_EMBEDDINGS: cleanup_obsolete_embeddings,
        HANDLE_DOCUMENT_EVENT: handle_document_event_task,
    }


async def dispatch(tasks: TaskTable, name: str, payload: dict[str, Any]) -> Any:
    """Run the task registered under ``name``."""
    handler = tasks.get(name)
    if handler is None:
        raise NotFound("Task", name)
    return await handler(payload)
