"""Unit of Work port - transactional boundary."""

from collections.abc import AsyncIterator
from typing import Protocol

from wikirag.application.ports.repositories.document_repository import DocumentRepository
from wikirag.application.ports.repositories.embedding_repository import (
    EmbeddingRepository,
)
from wikirag.application.ports.repositories.user_repository import UserRepository


class UnitOfWork(Protocol):
    """Unit of Work - manages transaction and repository access."""

    @property
    def documents(self) -> DocumentRepository: ...

    @property
    def embeddings(self) -> EmbeddingRepository: ...

    @property
    def users(self) -> UserRepository: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


class UnitOfWorkFactory(Protocol):
    """Factory for creating UnitOfWork instances."""

    async def __call__(self) -> AsyncIterator[UnitOfWork]: ...
