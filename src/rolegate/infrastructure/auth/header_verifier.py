"""Development credential verifier - trusts the token as the user id."""

from rolegate.application.ports import VerifiedUser


class TrustedHeaderVerifier:
    """Treats the bearer token itself as the user id.

    Only wired in when no Keycloak secret is configured outside production.
    """

    async def verify(self, token: str) -> VerifiedUser | None:
        token = token.strip()
        if not token:
            return None
        return VerifiedUser(user_id=token)
