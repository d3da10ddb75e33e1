"""CORS middleware for the wiki front end calling the RAG endpoints."""

import falcon
import falcon.asgi

ALLOWED_METHODS = "GET, POST, OPTIONS"
ALLOWED_HEADERS = "Authorization, Content-Type, X-User-Id"


class CORSMiddleware:
    """Echoes allowed origins and answers OPTIONS preflight.

    ``origins`` may contain ``"*"`` to allow any origin. An empty list disables
    CORS headers entirely.
    """

    def __init__(self, origins: list[str]) -> None:
        self._origins = set(origins)
        self._any = "*" in self._origins

    def _allowed_origin(self, origin: str | None) -> str | None:
        if not origin:
            return None
        if self._any or origin in self._origins:
            return origin
        return None

    def _apply(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        origin = self._allowed_origin(req.get_header("Origin"))
        resp.append_header("Vary", "Origin")
        if origin is None:
            return
        resp.set_header("Access-Control-Allow-Origin", origin)
        resp.set_header("Access-Control-Allow-Methods", ALLOWED_METHODS)
        resp.set_header("Access-Control-Allow-Headers", ALLOWED_HEADERS)
        resp.set_header("Access-Control-Max-Age", "86400")

    async def process_request(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        if req.method == "OPTIONS":
            self._apply(req, resp)
            resp.status = falcon.HTTP_204
            resp.complete = True

    async def process_response(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, resource, req_succeeded
    ) -> None:
        if req.method != "OPTIONS":
            self._apply(req, resp)
