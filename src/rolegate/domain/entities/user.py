"""User entity - read-only view of accounts managed elsewhere."""

from dataclasses import dataclass


@dataclass
class User:
    """User known to the store. id is the credential verifier's subject."""

    id: str
    email: str | None = None
    login: str | None = None
    name: str | None = None
    active: bool = True
