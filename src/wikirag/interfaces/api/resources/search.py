"""Search API resource."""

import falcon
import falcon.asgi

from wikirag.application.use_cases.search.hybrid_search import HybridSearchUseCase
from wikirag.domain.exceptions import ValidationError
from wikirag.interfaces.api.resources.users import resolve_user
from wikirag.interfaces.schemas.search import parse_search_request


class SearchResource:
    """POST /v1/rag/search - vector or hybrid search."""

    def __init__(self, hybrid_search: HybridSearchUseCase, unit_of_work_factory: type) -> None:
        self._hybrid_search = hybrid_search
        self._uow_factory = unit_of_work_factory

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Execute search."""
        user = await resolve_user(req, self._uow_factory)

        try:
            body = await req.get_media()
        except (falcon.MediaNotFoundError, falcon.MediaMalformedError) as e:
            raise ValidationError("Invalid request body") from e
        input_data = parse_search_request(body)

        results = await self._hybrid_search.execute(user, input_data)
        resp.media = {
            "data": [r.to_dict() for r in results],
            "pagination": {
                "limit": input_data.limit,
                "total": len(results),
            },
        }
        resp.status = falcon.HTTP_200
