"""Credential verifier port - turns a bearer token into a user id."""

from dataclasses import dataclass
from typing import Protocol


@dataclass
class VerifiedUser:
    """Authenticated user from a verified credential."""

    user_id: str
    email: str | None = None
    username: str | None = None


class CredentialVerifier(Protocol):
    """Port for opaque credential verification."""

    async def verify(self, token: str) -> VerifiedUser | None: ...
