"""Map domain errors to HTTP responses."""

import falcon
import falcon.asgi

from wikirag.domain.exceptions import (
    ConfigurationError,
    NotFound,
    PermissionDenied,
    UpstreamServiceError,
    ValidationError,
    WikiRAGError,
)
from wikirag.log import get_logger

logger = get_logger(__name__)


def status_for(exc: WikiRAGError) -> str:
    """HTTP status for a domain error."""
    if isinstance(exc, ValidationError):
        return falcon.HTTP_400
    if isinstance(exc, PermissionDenied):
        return falcon.HTTP_403
    if isinstance(exc, NotFound):
        return falcon.HTTP_404
    if isinstance(exc, UpstreamServiceError):
        return falcon.HTTP_502
    if isinstance(exc, ConfigurationError):
        return falcon.HTTP_503
    return falcon.HTTP_500


async def handle_wikirag_error(
    req: falcon.asgi.Request, resp: falcon.asgi.Response, ex: WikiRAGError, params: dict
) -> None:
    """Falcon error handler for WikiRAGError."""
    resp.status = status_for(ex)
    media: dict = {"error": str(ex)}
    if isinstance(ex, ValidationError) and ex.details:
        media["details"] = ex.details
    if resp.status == falcon.HTTP_500 or isinstance(ex, UpstreamServiceError):
        logger.error("Request %s %s failed: %s", req.method, req.path, ex)
    resp.media = media


async def handle_unexpected_error(
    req: falcon.asgi.Request, resp: falcon.asgi.Response, ex: Exception, params: dict
) -> None:
    """Falcon error handler for anything else."""
    logger.exception("Unhandled error on %s %s", req.method, req.path)
    resp.status = falcon.HTTP_500
    resp.media = {"title": "500 Internal Server Error"}
