"""Permission resolver port - computes effective permission sets."""

from typing import Protocol


class PermissionResolver(Protocol):
    """Port for resolving a user's effective permissions and role names."""

    async def resolve(self, user_id: str) -> frozenset[str]: ...

    async def resolve_role_names(self, user_id: str) -> list[str]: ...
