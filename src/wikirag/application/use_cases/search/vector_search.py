"""Vector search use case - permission-filtered nearest neighbours."""

from dataclasses import replace

from wikirag.application.dto.search_dto import SearchInput, SearchResult, SearchScope
from wikirag.application.ports import AccessControl, EmbeddingProvider
from wikirag.config import Settings
from wikirag.domain.entities import User
from wikirag.domain.exceptions import ConfigurationError, UpstreamServiceError


class VectorSearchUseCase:
    """Embed the query and rank the user's readable chunks by cosine similarity."""

    def __init__(
        self,
        settings: Settings,
        unit_of_work_factory: type,
        embedding_provider: EmbeddingProvider,
        access_control: AccessControl,
    ) -> None:
        self._settings = settings
        self._uow_factory = unit_of_work_factory
        self._embedding_provider = embedding_provider
        self._access_control = access_control

    async def execute(self, user: User, input_data: SearchInput) -> list[SearchResult]:
        """Execute vector search."""
        if not self._settings.enabled:
            raise ConfigurationError("RAG is not enabled")

        threshold = (
            input_data.threshold
            if input_data.threshold is not None
            else self._settings.similarity_threshold
        )
        query_embedding = await self._embedding_provider.embed_one(input_data.query)
        if len(query_embedding) != self._settings.embedding_dimension:
            raise UpstreamServiceError(
                f"Query embedding has dimension {len(query_embedding)}, "
                f"expected {self._settings.embedding_dimension}"
            )
        collection_ids = await self._access_control.collection_ids(user)

        scope = SearchScope(
            team_id=user.team_id,
            user_id=user.id,
            model_id=self._settings.embedding_model,
            collection_ids=frozenset(collection_ids),
            collection_id=input_data.collection_id,
            document_id=input_data.document_id,
        )
        async with self._uow_factory() as uow:
            results = await uow.embeddings.nearest(
                query_embedding,
                scope,
                limit=input_data.limit,
                threshold=threshold,
            )

        if not input_data.include_context:
            results = [replace(r, context="") for r in results]
        return results
