"""Domain value objects."""

from wikirag.domain.value_objects.document_event_kind import DocumentEventKind
from wikirag.domain.value_objects.generation_status import GenerationStatus
from wikirag.domain.value_objects.search_mode import SearchMode

__all__ = [
    "DocumentEventKind",
    "GenerationStatus",
    "SearchMode",
]
