"""Keycloak OIDC provider for JWT validation."""

from dataclasses import dataclass

from keycloak import KeycloakOpenID
from keycloak.exceptions import KeycloakError

from wikirag.log import get_logger

logger = get_logger(__name__)


@dataclass
class OIDCUser:
    """Authenticated subject from OIDC token."""

    user_id: str
    email: str | None
    username: str | None


class KeycloakProvider:
    """Keycloak OIDC - validates JWT and extracts user info."""

    def __init__(
        self,
        server_url: str,
        realm: str,
        client_id: str,
        client_secret: str = "",
    ) -> None:
        self._keycloak = KeycloakOpenID(
            server_url=server_url,
            realm_name=realm,
            client_id=client_id,
            client_secret_key=client_secret,
        )

    def decode_token(self, token: str) -> OIDCUser | None:
        """Introspect token, return subject info or None when inactive or invalid."""
        try:
            token_info = self._keycloak.introspect(token)
        except KeycloakError as e:
            logger.warning("Token introspection failed: %s", e)
            return None
        if not token_info.get("active"):
            return None
        return OIDCUser(
            user_id=token_info.get("sub", ""),
            email=token_info.get("email"),
            username=token_info.get("preferred_username"),
        )
