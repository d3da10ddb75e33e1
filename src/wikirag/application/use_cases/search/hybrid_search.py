"""Hybrid search use case - vector + keyword fused with Reciprocal Rank Fusion."""

import asyncio
from dataclasses import replace

from wikirag.application.dto.search_dto import KeywordHit, SearchInput, SearchResult
from wikirag.application.ports import KeywordSearch
from wikirag.application.use_cases.search.vector_search import VectorSearchUseCase
from wikirag.domain.entities import User
from wikirag.domain.value_objects import SearchMode

RRF_K = 60


def rrf_score(rank: int, k: int = RRF_K) -> float:
    """RRF contribution of a 0-based rank."""
    return 1 / (k + rank + 1)


def merge_with_rrf(
    vector_results: list[SearchResult],
    keyword_hits: list[KeywordHit],
    limit: int = 10,
    vector_weight: float = 0.7,
    keyword_weight: float = 0.3,
    k: int = RRF_K,
) -> list[SearchResult]:
    """Fuse two ranked lists into one list of documents ordered by weighted RRF.

    A document is represented by its best-ranked vector chunk; documents found only
    by keyword search get a ``kw_`` id, score 0 and chunk index 0.
    """
    scores: dict[object, float] = {}
    results: dict[object, SearchResult] = {}

    for rank, result in enumerate(vector_results):
        if result.document_id in scores:
            continue
        scores[result.document_id] = vector_weight * rrf_score(rank, k)
        results[result.document_id] = result

    for rank, hit in enumerate(keyword_hits):
        contribution = keyword_weight * rrf_score(rank, k)
        if hit.document_id in scores:
            scores[hit.document_id] += contribution
            continue
        scores[hit.document_id] = contribution
        results[hit.document_id] = SearchResult(
            id=f"kw_{hit.document_id}",
            document_id=hit.document_id,
            title=hit.title,
            collection_id=hit.collection_id,
            score=0.0,
            context=hit.context or "",
            chunk_index=0,
        )

    ranked = sorted(scores.items(), key=lambda item: item[1], reverse=True)
    return [
        replace(results[document_id], fused_score=score)
        for document_id, score in ranked[:limit]
    ]


class HybridSearchUseCase:
    """Vector search, optionally fused with keyword search."""

    def __init__(
        self,
        vector_search: VectorSearchUseCase,
        keyword_search: KeywordSearch,
    ) -> None:
        self._vector_search = vector_search
        self._keyword_search = keyword_search

    async def execute(self, user: User, input_data: SearchInput) -> list[SearchResult]:
        """Execute search in the requested mode."""
        if input_data.mode == SearchMode.VECTOR:
            return await self._vector_search.execute(user, input_data)

        vector_results, keyword_hits = await asyncio.gather(
            self._vector_search.execute(user, input_data),
            self._keyword_search.search_for_user(user, input_data.query, input_data.limit),
        )
        if not input_data.include_context:
            keyword_hits = [replace(h, context="") for h in keyword_hits]
        return merge_with_rrf(
            vector_results,
            keyword_hits,
            limit=input_data.limit,
            vector_weight=input_data.vector_weight,
            keyword_weight=input_data.keyword_weight,
        )
