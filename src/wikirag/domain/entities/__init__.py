"""Domain entities."""

from wikirag.domain.entities.chunk import Chunk
from wikirag.domain.entities.document import Document
from wikirag.domain.entities.document_embedding import DocumentEmbedding
from wikirag.domain.entities.user import User

__all__ = [
    "Chunk",
    "Document",
    "DocumentEmbedding",
    "User",
]
