"""Falcon ASGI application."""

import falcon.asgi
from falcon.asgi import App

from wikirag.domain.exceptions import WikiRAGError
from wikirag.interfaces.api.errors import handle_unexpected_error, handle_wikirag_error
from wikirag.interfaces.api.resources.embeddings import DocumentEmbeddingsResource
from wikirag.interfaces.api.resources.health import HealthResource
from wikirag.interfaces.api.resources.search import SearchResource


def create_app(
    search_resource: SearchResource,
    embeddings_resource: DocumentEmbeddingsResource,
    health_resource: HealthResource,
    middleware: list | None = None,
) -> App:
    """Create Falcon ASGI app with routes and error handlers."""
    app = falcon.asgi.App(middleware=middleware or [])
    app.add_error_handler(Exception, handle_unexpected_error)
    app.add_error_handler(WikiRAGError, handle_wikirag_error)
    app.add_route("/v1/health", health_resource)
    app.add_route("/v1/health/ready", health_resource, suffix="ready")
    app.add_route("/v1/rag/search", search_resource)
    app.add_route("/v1/rag/documents/{document_id}/embeddings", embeddings_resource)
    return app
