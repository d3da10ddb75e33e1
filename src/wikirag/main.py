"""Application entry point and composition root."""

from dataclasses import dataclass

from wikirag import __version__
from wikirag.application.dto.chunking_config import ChunkingConfig
from wikirag.application.ports import EmbeddingProvider, KeywordSearch
from wikirag.application.tasks import TaskTable, build_task_table
from wikirag.application.use_cases.embedding.bulk_index import BulkIndexDocumentsUseCase
from wikirag.application.use_cases.embedding.cleanup_obsolete import (
    CleanupObsoleteEmbeddingsUseCase,
)
from wikirag.application.use_cases.embedding.generate_embeddings import (
    GenerateDocumentEmbeddingsUseCase,
)
from wikirag.application.use_cases.search.hybrid_search import HybridSearchUseCase
from wikirag.application.use_cases.search.vector_search import VectorSearchUseCase
from wikirag.config import Settings, get_settings
from wikirag.infrastructure.auth.keycloak_provider import KeycloakProvider
from wikirag.infrastructure.chunking.boundary_chunker import BoundaryChunker
from wikirag.infrastructure.embedding.litellm_provider import LiteLLMEmbeddingProvider
from wikirag.infrastructure.permission.access_control import WikiAccessControl
from wikirag.infrastructure.persistence.postgres.connection import create_pool
from wikirag.infrastructure.persistence.postgres.unit_of_work import create_uow_factory
from wikirag.infrastructure.search.keyword_search import PostgresKeywordSearch
from wikirag.infrastructure.tasks.inline_scheduler import InlineTaskScheduler
from wikirag.interfaces.api.app import create_app
from wikirag.interfaces.api.middleware.auth import AuthMiddleware
from wikirag.interfaces.api.middleware.cors import CORSMiddleware
from wikirag.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware
from wikirag.interfaces.api.resources.embeddings import DocumentEmbeddingsResource
from wikirag.interfaces.api.resources.health import HealthResource
from wikirag.interfaces.api.resources.search import SearchResource
from wikirag.log import get_logger, setup_logging

logger = get_logger(__name__)


@dataclass
class Services:
    """Wired use cases shared by the API and the CLI."""

    generate_embeddings: GenerateDocumentEmbeddingsUseCase
    bulk_index: BulkIndexDocumentsUseCase
    cleanup_obsolete: CleanupObsoleteEmbeddingsUseCase
    vector_search: VectorSearchUseCase
    hybrid_search: HybridSearchUseCase
    access_control: WikiAccessControl
    tasks: TaskTable
    scheduler: InlineTaskScheduler


def build_services(
    settings: Settings,
    uow_factory: type,
    embedding_provider: EmbeddingProvider | None = None,
    keyword_search: KeywordSearch | None = None,
) -> Services:
    """Wire use cases from settings and a unit of work factory."""
    embedding_provider = embedding_provider or LiteLLMEmbeddingProvider(
        base_url=settings.litellm_base_url,
        api_key=settings.litellm_api_key,
        model=settings.embedding_model,
        batch_size=settings.embedding_batch_size,
        timeout=settings.request_timeout,
    )
    chunker = BoundaryChunker(
        ChunkingConfig(chunk_size=settings.chunk_size, chunk_overlap=settings.chunk_overlap)
    )
    access_control = WikiAccessControl(uow_factory)
    keyword_search = keyword_search or PostgresKeywordSearch(uow_factory, access_control)
    scheduler = InlineTaskScheduler()

    generate_embeddings = GenerateDocumentEmbeddingsUseCase(
        settings=settings,
        unit_of_work_factory=uow_factory,
        chunker=chunker,
        embedding_provider=embedding_provider,
    )
    bulk_index = BulkIndexDocumentsUseCase(
        settings=settings,
        unit_of_work_factory=uow_factory,
        scheduler=scheduler,
    )
    cleanup_obsolete = CleanupObsoleteEmbeddingsUseCase(
        settings=settings,
        unit_of_work_factory=uow_factory,
    )
    vector_search = VectorSearchUseCase(
        settings=settings,
        unit_of_work_factory=uow_factory,
        embedding_provider=embedding_provider,
        access_control=access_control,
    )
    hybrid_search = HybridSearchUseCase(
        vector_search=vector_search,
        keyword_search=keyword_search,
    )
    tasks = build_task_table(
        settings, generate_embeddings, bulk_index, cleanup_obsolete, scheduler
    )
    scheduler.bind(tasks)

    return Services(
        generate_embeddings=generate_embeddings,
        bulk_index=bulk_index,
        cleanup_obsolete=cleanup_obsolete,
        vector_search=vector_search,
        hybrid_search=hybrid_search,
        access_control=access_control,
        tasks=tasks,
        scheduler=scheduler,
    )


def create_wikirag_app(settings: Settings | None = None):
    """Composition root - build Falcon app with all dependencies."""
    settings = settings or get_settings()
    setup_logging(settings)
    pool = create_pool(settings.database_url)
    uow_factory = create_uow_factory(pool)
    services = build_services(settings, uow_factory)

    keycloak = (
        KeycloakProvider(
            server_url=settings.keycloak_url,
            realm=settings.keycloak_realm,
            client_id=settings.keycloak_client_id,
            client_secret=settings.keycloak_client_secret,
        )
        if settings.keycloak_client_secret
        else None
    )
    if keycloak is None:
        logger.warning("Keycloak is not configured; trusting X-User-Id header")

    cors_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    logger.info(
        "wikirag v%s starting (rag enabled=%s, model=%s)",
        __version__,
        settings.enabled,
        settings.embedding_model,
    )
    return create_app(
        search_resource=SearchResource(services.hybrid_search, uow_factory),
        embeddings_resource=DocumentEmbeddingsResource(
            services.generate_embeddings, services.access_control, uow_factory
        ),
        health_resource=HealthResource(pool),
        middleware=[
            CORSMiddleware(cors_origins),
            PoolLifespanMiddleware(pool, check_schema=settings.enabled),
            AuthMiddleware(keycloak),
        ],
    )


def main() -> None:
    """Run uvicorn server."""
    import uvicorn

    uvicorn.run(create_wikirag_app(), host="0.0.0.0", port=8000)
