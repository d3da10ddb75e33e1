"""Auth middleware - extracts the requesting user id."""

from dataclasses import dataclass

import falcon.asgi


@dataclass
class RequestUser:
    """User from request context."""

    user_id: str
    email: str | None = None
    username: str | None = None


class AuthMiddleware:
    """Sets req.context.user from a Keycloak JWT.

    Without Keycloak (development) the ``X-User-Id`` header is trusted instead.
    """

    def __init__(self, keycloak_provider=None) -> None:
        self._keycloak = keycloak_provider

    async def process_request(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Extract user from Authorization or X-User-Id header."""
        req.context.user = None
        if self._keycloak is None:
            user_id = req.get_header("X-User-Id")
            if user_id:
                req.context.user = RequestUser(user_id=user_id)
            return

        auth = req.get_header("Authorization")
        if auth and auth.startswith("Bearer "):
            user = self._keycloak.decode_token(auth[7:])
            if user:
                req.context.user = RequestUser(
                    user_id=user.user_id,
                    email=user.email,
                    username=user.username,
                )
