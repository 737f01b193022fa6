"""Permission resolver implementation - reads grants from the store."""

import asyncio
import logging
from collections.abc import Callable
from datetime import UTC, datetime

from rolegate.domain.entities import UserPermission, UserRole
from rolegate.domain.services import collapse_wildcard, union_identifiers

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(UTC)


class StorePermissionResolver:
    """Expands direct and role-derived grants into an effective permission set."""

    def __init__(
        self,
        unit_of_work_factory: type,
        *,
        enforce_role_expiry: bool = False,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._enforce_role_expiry = enforce_role_expiry
        self._clock = clock

    async def resolve(self, user_id: str) -> frozenset[str]:
        """Resolve effective permissions. Empty set when the user has no grants."""
        now = self._clock()
        direct, assignments = await asyncio.gather(
            self._direct_grants(user_id, now),
            self._role_assignments(user_id),
        )
        identifiers = union_identifiers(
            direct,
            assignments,
            now,
            enforce_role_expiry=self._enforce_role_expiry,
        )
        effective = collapse_wildcard(identifiers)
        logger.debug(
            "Resolved %d permissions for user %s (%d direct, %d roles)",
            len(effective),
            user_id,
            len(direct),
            len(assignments),
        )
        return effective

    async def resolve_role_names(self, user_id: str) -> list[str]:
        """Names of roles assigned to the user."""
        now = self._clock()
        assignments = await self._role_assignments(user_id)
        return [
            a.role.name
            for a in assignments
            if a.role is not None
            and not (self._enforce_role_expiry and a.is_expired(now))
        ]

    async def _direct_grants(self, user_id: str, now: datetime) -> list[UserPermission]:
        async with self._uow_factory() as uow:
            return await uow.user_permissions.list_active_by_user(user_id, now)

    async def _role_assignments(self, user_id: str) -> list[UserRole]:
        async with self._uow_factory() as uow:
            return await uow.user_roles.list_by_user(user_id)
