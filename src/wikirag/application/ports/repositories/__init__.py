"""Repository ports."""

from wikirag.application.ports.repositories.document_repository import (
    DocumentRepository,
)
from wikirag.application.ports.repositories.embedding_repository import (
    EmbeddingRepository,
)
from wikirag.application.ports.repositories.user_repository import UserRepository

__all__ = [
    "DocumentRepository",
    "EmbeddingRepository",
    "UserRepository",
]
