"""Fixtures for API tests."""

import pytest
from falcon.testing import TestClient

from wikirag.interfaces.api.app import create_app
from wikirag.interfaces.api.middleware.auth import AuthMiddleware
from wikirag.interfaces.api.resources.embeddings import DocumentEmbeddingsResource
from wikirag.interfaces.api.resources.health import HealthResource
from wikirag.interfaces.api.resources.search import SearchResource
from wikirag.main import build_services


@pytest.fixture
def services(settings, uow_factory, embedding_provider):
    return build_services(settings, uow_factory, embedding_provider=embedding_provider)


@pytest.fixture
def app(services, uow_factory):
    """Falcon ASGI app trusting the X-User-Id header."""
    return create_app(
        search_resource=SearchResource(services.hybrid_search, uow_factory),
        embeddings_resource=DocumentEmbeddingsResource(
            services.generate_embeddings, services.access_control, uow_factory
        ),
        health_resource=HealthResource(),
        middleware=[AuthMiddleware(None)],
    )


@pytest.fixture
def client(app):
    """Falcon ASGI test client."""
    return TestClient(app)


@pytest.fixture
def headers(user):
    return {"X-User-Id": str(user.id)}
