"""Document repository port (read side)."""

from typing import Protocol
from uuid import UUID

from wikirag.application.dto.search_dto import KeywordHit
from wikirag.domain.entities import Document


class DocumentRepository(Protocol):
    """Port for reading wiki documents."""

    async def get_by_id(self, document_id: UUID) -> Document | None: ...

    async def list_searchable_ids(self, team_id: UUID) -> list[UUID]: ...

    async def search_text(
        self,
        *,
        team_id: UUID,
        user_id: UUID,
        collection_ids: list[UUID],
        query: str,
        limit: int = 10,
    ) -> list[KeywordHit]: ...
