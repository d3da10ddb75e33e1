"""Keyword search port - full-text search over documents."""

from typing import Protocol

from wikirag.application.dto.search_dto import KeywordHit
from wikirag.domain.entities import User


class KeywordSearch(Protocol):
    """Port for the keyword (full-text) search engine."""

    async def search_for_user(self, user: User, query: str, limit: int = 10) -> list[KeywordHit]: ...
