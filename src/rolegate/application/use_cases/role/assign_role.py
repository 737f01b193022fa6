"""Assign role use case."""

import logging
from datetime import UTC, datetime
from uuid import UUID

from rolegate.application.ports import PermissionCacheInvalidator
from rolegate.domain.entities import UserRole
from rolegate.domain.exceptions import NotFoundError

logger = logging.getLogger(__name__)


class AssignRoleUseCase:
    """Assign a role to a user (upsert)."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_cache: PermissionCacheInvalidator,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_cache = permission_cache

    async def execute(
        self,
        user_id: str,
        role_id: UUID,
        assigned_by: str | None,
        expires_at: datetime | None = None,
    ) -> UserRole:
        """Create or refresh the assignment. Re-assigning updates assigned_at and expires_at."""
        async with self._uow_factory() as uow:
            user = await uow.users.get_by_id(user_id)
            if not user:
                raise NotFoundError("User", user_id)
            role = await uow.roles.get_by_id(role_id)
            if not role:
                raise NotFoundError("Role", role_id)

            assignment = await uow.user_roles.upsert(
                UserRole(
                    user_id=user_id,
                    role_id=role_id,
                    assigned_at=datetime.now(UTC),
                    assigned_by=assigned_by,
                    expires_at=expires_at,
                )
            )
            assignment.role = role

        self._permission_cache.invalidate(user_id)
        logger.info("Assigned role %s to user %s by %s", role.name, user_id, assigned_by)
        return assignment
