"""Search DTOs."""

from dataclasses import dataclass, field
from uuid import UUID

from wikirag.domain.value_objects import SearchMode


@dataclass
class SearchInput:
    """Input for vector and hybrid search."""

    query: str
    limit: int = 10
    threshold: float | None = None  # None -> configured similarity threshold
    collection_id: UUID | None = None
    document_id: UUID | None = None
    include_context: bool = True
    mode: SearchMode = SearchMode.VECTOR
    vector_weight: float = 0.7
    keyword_weight: float = 0.3


@dataclass
class SearchResult:
    """Single ranked search result.

    ``score`` is the raw cosine similarity of a vector hit and 0 for keyword-only
    hits. ``fused_score`` is set by hybrid ranking and is the only value hybrid
    results are ordered by.
    """

    id: str
    document_id: UUID
    title: str
    collection_id: UUID | None
    score: float
    context: str
    chunk_index: int
    fused_score: float | None = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "documentId": str(self.document_id),
            "title": self.title,
            "collectionId": str(self.collection_id) if self.collection_id else None,
            "score": round(self.score, 6),
            "fusedScore": round(self.fused_score, 6) if self.fused_score is not None else None,
            "context": self.context,
            "chunkIndex": self.chunk_index,
        }


@dataclass
class KeywordHit:
    """Document-level hit from the keyword search engine."""

    document_id: UUID
    title: str
    collection_id: UUID | None
    context: str = ""
    ranking: float | None = None


@dataclass(frozen=True)
class SearchScope:
    """Access-control predicate for nearest-neighbour search."""

    team_id: UUID
    user_id: UUID
    model_id: str
    collection_ids: frozenset[UUID] = field(default_factory=frozenset)
    collection_id: UUID | None = None
    document_id: UUID | None = None
