"""Document entity."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass
class Document:
    """Wiki document as seen by the retrieval side (read-only)."""

    id: UUID
    team_id: UUID
    collection_id: UUID | None
    title: str
    text: str
    version: int
    published_at: datetime | None = None
    deleted_at: datetime | None = None
    archived_at: datetime | None = None

    @property
    def is_searchable(self) -> bool:
        """Published, not deleted and not archived."""
        return (
            self.published_at is not None
            and self.deleted_at is None
            and self.archived_at is None
        )
