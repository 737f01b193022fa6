"""Auth middleware - resolves the bearer token to a user id."""

from dataclasses import dataclass

import falcon.asgi

from rolegate.application.ports import CredentialVerifier


@dataclass
class RequestUser:
    """User from request context."""

    user_id: str
    email: str | None = None
    username: str | None = None


class AuthMiddleware:
    """Middleware that verifies the bearer token and sets req.context.user.

    req.context.user is None when the header is missing or the token is rejected.
    """

    def __init__(self, verifier: CredentialVerifier) -> None:
        self._verifier = verifier

    async def process_request(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        """Extract user from Authorization header."""
        req.context.user = None
        auth = req.get_header("Authorization")
        if not auth or not auth.startswith("Bearer "):
            return
        user = await self._verifier.verify(auth[7:])
        if user:
            req.context.user = RequestUser(
                user_id=user.user_id,
                email=user.email,
                username=user.username,
            )
