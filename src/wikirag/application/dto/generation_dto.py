"""Embedding generation DTOs."""

from dataclasses import dataclass
from uuid import UUID

from wikirag.domain.value_objects import GenerationStatus


@dataclass(frozen=True)
class GenerationResult:
    """Outcome of one generation request."""

    document_id: UUID
    status: GenerationStatus
    chunk_count: int = 0

    def to_dict(self) -> dict:
        return {
            "document_id": str(self.document_id),
            "status": self.status.value,
            "chunk_count": self.chunk_count,
        }
