"""Document change events relevant to embeddings."""

from enum import StrEnum


class DocumentEventKind(StrEnum):
    """Kinds of document change events."""

    CREATED = "documents.create"
    UPDATED = "documents.update"
    PUBLISHED = "documents.publish"
    DELETED = "documents.delete"
