"""User repository port."""

from typing import Protocol
from uuid import UUID

from wikirag.domain.entities import User


class UserRepository(Protocol):
    """Port for reading users."""

    async def get_by_id(self, user_id: UUID) -> User | None: ...

    async def collection_ids(self, user_id: UUID, team_id: UUID) -> list[UUID]: ...

    async def has_document_membership(self, user_id: UUID, document_id: UUID) -> bool: ...
