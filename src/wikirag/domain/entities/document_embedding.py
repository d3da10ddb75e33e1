"""Document embedding entity - one vector per chunk and model."""

from dataclasses import dataclass
from uuid import UUID


@dataclass
class DocumentEmbedding:
    """Embedding of one chunk, stamped with the document version it was built from."""

    id: UUID
    document_id: UUID
    team_id: UUID
    model_id: str
    document_version: int
    chunk_index: int
    context: str
    embedding: list[float]
