"""PostgreSQL full-text keyword search."""

from wikirag.application.dto.search_dto import KeywordHit
from wikirag.application.ports import AccessControl
from wikirag.domain.entities import User


class PostgresKeywordSearch:
    """Keyword search over documents.search_vector, filtered by access control."""

    def __init__(self, unit_of_work_factory: type, access_control: AccessControl) -> None:
        self._uow_factory = unit_of_work_factory
        self._access_control = access_control

    async def search_for_user(self, user: User, query: str, limit: int = 10) -> list[KeywordHit]:
        """Return document-level keyword hits, best ranked first."""
        collection_ids = await self._access_control.collection_ids(user)
        async with self._uow_factory() as uow:
            return await uow.documents.search_text(
                team_id=user.team_id,
                user_id=user.id,
                collection_ids=collection_ids,
                query=query,
                limit=limit,
            )
