"""Authorization guard implementation - cache, resolver and match engine."""

import logging
from collections.abc import Iterable, Sequence

from rolegate.application.ports import PermissionResolver
from rolegate.domain.services import evaluate, matches
from rolegate.domain.value_objects import MatchMode
from rolegate.infrastructure.permission.permission_cache import PermissionCache

logger = logging.getLogger(__name__)


class RoleGateAuthorizationGuard:
    """Decides allow/deny for users. Denial is a False result, never an exception."""

    def __init__(self, cache: PermissionCache, resolver: PermissionResolver) -> None:
        self._cache = cache
        self._resolver = resolver

    async def authorize(
        self,
        user_id: str,
        required: str | Sequence[str],
        mode: MatchMode = MatchMode.ANY,
    ) -> bool:
        """Check required permission(s), combined with ALL or ANY."""
        if isinstance(required, str):
            required = [required]
        effective = await self._cache.get_or_resolve(user_id)
        allowed = evaluate(list(required), effective, MatchMode(mode))
        if not allowed:
            logger.info(
                "Denied user %s: requires %s of %s", user_id, mode, ", ".join(required)
            )
        return allowed

    async def has_permission(self, user_id: str, permission: str) -> bool:
        effective = await self._cache.get_or_resolve(user_id)
        return matches(permission, effective)

    async def get_user_permissions(self, user_id: str) -> list[str]:
        """Effective permission identifiers, sorted."""
        return sorted(await self._cache.get_or_resolve(user_id))

    async def get_user_roles(self, user_id: str) -> list[str]:
        return await self._resolver.resolve_role_names(user_id)

    async def has_any_role(self, user_id: str, role_names: Iterable[str]) -> bool:
        """True when the user holds at least one of role_names."""
        wanted = set(role_names)
        roles = await self._resolver.resolve_role_names(user_id)
        return any(name in wanted for name in roles)
