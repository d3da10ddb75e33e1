"""Access control implementation - collections and documents readable by a user."""

from uuid import UUID

from wikirag.domain.entities import Document, User


class WikiAccessControl:
    """Resolves access from collection permissions and memberships."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def collection_ids(self, user: User) -> list[UUID]:
        """Collections the user can read."""
        async with self._uow_factory() as uow:
            return await uow.users.collection_ids(user.id, user.team_id)

    async def can_read(self, user: User, document: Document) -> bool:
        """Same-team document in a readable collection or shared with the user directly."""
        if document.team_id != user.team_id:
            return False
        async with self._uow_factory() as uow:
            if document.collection_id is not None:
                readable = await uow.users.collection_ids(user.id, user.team_id)
                if document.collection_id in readable:
                    return True
            return await uow.users.has_document_membership(user.id, document.id)
