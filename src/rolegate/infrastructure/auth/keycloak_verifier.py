"""Keycloak OIDC credential verifier for bearer tokens."""

import logging

from keycloak import KeycloakOpenID
from keycloak.exceptions import KeycloakError

from rolegate.application.ports import VerifiedUser

logger = logging.getLogger(__name__)


class KeycloakCredentialVerifier:
    """Keycloak OIDC - introspects the token and extracts the subject."""

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

    async def verify(self, token: str) -> VerifiedUser | None:
        """Validate the token, return user info or None when it is not active."""
        try:
            token_info = await self._keycloak.a_introspect(token)
        except KeycloakError as e:
            logger.warning("Token introspection failed: %s", e)
            return None
        if not token_info.get("active") or not token_info.get("sub"):
            return None
        return VerifiedUser(
            user_id=token_info["sub"],
            email=token_info.get("email"),
            username=token_info.get("preferred_username"),
        )
