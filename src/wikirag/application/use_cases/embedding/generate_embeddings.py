"""Generate document embeddings use case."""

from uuid import UUID, uuid4

from wikirag.application.dto.generation_dto import GenerationResult
from wikirag.application.ports import Chunker, EmbeddingProvider
from wikirag.config import Settings
from wikirag.domain.entities import DocumentEmbedding
from wikirag.domain.exceptions import UpstreamServiceError
from wikirag.domain.value_objects import GenerationStatus
from wikirag.log import get_logger

logger = get_logger(__name__)


class GenerateDocumentEmbeddingsUseCase:
    """Chunk, embed and store one document, skipping when embeddings are current.

    The embedding call happens before any write; the delete-then-insert swap runs
    in a single unit of work, so a failure leaves the previous set in place.
    """

    def __init__(
        self,
        settings: Settings,
        unit_of_work_factory: type,
        chunker: Chunker,
        embedding_provider: EmbeddingProvider,
    ) -> None:
        self._settings = settings
        self._uow_factory = unit_of_work_factory
        self._chunker = chunker
        self._embedding_provider = embedding_provider

    async def execute(self, document_id: UUID, force: bool = False) -> GenerationResult:
        """Bring embeddings of a document up to date with its current version."""
        if not self._settings.enabled:
            return GenerationResult(document_id, GenerationStatus.SKIPPED_DISABLED)

        model_id = self._settings.embedding_model

        async with self._uow_factory() as uow:
            document = await uow.documents.get_by_id(document_id)
            latest_version = (
                await uow.embeddings.latest_version(document_id, model_id) if document else None
            )

        if not document:
            logger.warning("Document %s not found for embedding generation", document_id)
            return GenerationResult(document_id, GenerationStatus.SKIPPED_MISSING)

        if not force and latest_version is not None and latest_version >= document.version:
            logger.info("Embeddings for document %s are up to date", document_id)
            return GenerationResult(document_id, GenerationStatus.SKIPPED_UP_TO_DATE)

        # Deleted documents are blanked the same way as documents too short to chunk.
        chunks = [] if document.deleted_at else self._chunker.chunk_text(document.text)
        if not chunks:
            async with self._uow_factory() as uow:
                removed = await uow.embeddings.delete_for_document(document_id, model_id)
            logger.info(
                "Document %s has no chunkable content, removed %d embeddings",
                document_id,
                removed,
            )
            return GenerationResult(document_id, GenerationStatus.CLEARED)

        vectors = await self._embedding_provider.embed([c.text for c in chunks])
        if len(vectors) != len(chunks):
            raise UpstreamServiceError(
                f"Expected {len(chunks)} embeddings for document {document_id}, got {len(vectors)}"
            )
        dimension = self._settings.embedding_dimension
        if any(len(v) != dimension for v in vectors):
            raise UpstreamServiceError(
                f"Embedding model {model_id} returned vectors not of dimension {dimension}"
            )

        embeddings = [
            DocumentEmbedding(
                id=uuid4(),
                document_id=document.id,
                team_id=document.team_id,
                model_id=model_id,
                document_version=document.version,
                chunk_index=chunk.index,
                context=chunk.text,
                embedding=vector,
            )
            for chunk, vector in zip(chunks, vectors, strict=True)
        ]
        async with self._uow_factory() as uow:
            await uow.embeddings.replace_for_document(document.id, model_id, embeddings)

        logger.info("Generated %d embeddings for document %s", len(embeddings), document_id)
        return GenerationResult(document_id, GenerationStatus.REGENERATED, len(embeddings))
