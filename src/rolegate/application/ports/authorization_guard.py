"""Authorization guard port - enforcement point for the routing layer."""

from collections.abc import Iterable, Sequence
from typing import Protocol

from rolegate.domain.value_objects import MatchMode


class AuthorizationGuard(Protocol):
    """Port for allow/deny decisions and permission lookups."""

    async def authorize(
        self,
        user_id: str,
        required: str | Sequence[str],
        mode: MatchMode = MatchMode.ANY,
    ) -> bool: ...

    async def get_user_permissions(self, user_id: str) -> list[str]: ...

    async def get_user_roles(self, user_id: str) -> list[str]: ...

    async def has_any_role(self, user_id: str, role_names: Iterable[str]) -> bool: ...
