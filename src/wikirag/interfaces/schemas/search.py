"""Search request schema."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from wikirag.application.dto.search_dto import SearchInput
from wikirag.domain.exceptions import ValidationError
from wikirag.domain.value_objects import SearchMode


class SearchRequest(BaseModel):
    """Request model for the search endpoint and CLI."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    query: str = Field(..., description="Search query text", min_length=3, max_length=1000)
    limit: int = Field(10, description="Maximum number of results", ge=1, le=50)
    threshold: float | None = Field(None, description="Minimum cosine similarity", ge=0, le=1)
    collection_id: UUID | None = Field(None, alias="collectionId")
    document_id: UUID | None = Field(None, alias="documentId")
    include_context: bool = Field(True, alias="includeContext")
    mode: SearchMode = Field(SearchMode.VECTOR, description="vector or hybrid")
    vector_weight: float = Field(0.7, alias="vectorWeight", ge=0, le=1)
    keyword_weight: float = Field(0.3, alias="keywordWeight", ge=0, le=1)

    def to_input(self) -> SearchInput:
        return SearchInput(
            query=self.query,
            limit=self.limit,
            threshold=self.threshold,
            collection_id=self.collection_id,
            document_id=self.document_id,
            include_context=self.include_context,
            mode=self.mode,
            vector_weight=self.vector_weight,
            keyword_weight=self.keyword_weight,
        )


def parse_search_request(data: object) -> SearchInput:
    """Validate raw request data, raising ValidationError with field details."""
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    try:
        return SearchRequest.model_validate(data).to_input()
    except PydanticValidationError as e:
        details = e.errors(include_url=False, include_context=False, include_input=False)
        raise ValidationError("Invalid search request", details=list(details)) from e
