"""Access control port - what a user may read."""

from typing import Protocol
from uuid import UUID

from wikirag.domain.entities import Document, User


class AccessControl(Protocol):
    """Port resolving the collections and documents accessible to a user."""

    async def collection_ids(self, user: User) -> list[UUID]: ...

    async def can_read(self, user: User, document: Document) -> bool: ...
