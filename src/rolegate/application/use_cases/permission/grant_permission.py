"""Grant permission use case."""

import logging
from datetime import UTC, datetime
from uuid import UUID

from rolegate.application.ports import PermissionCacheInvalidator
from rolegate.domain.entities import UserPermission
from rolegate.domain.exceptions import NotFoundError

logger = logging.getLogger(__name__)


class GrantPermissionUseCase:
    """Grant a permission directly to a user (upsert)."""

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
        permission_id: UUID,
        granted_by: str | None,
        expires_at: datetime | None = None,
    ) -> UserPermission:
        """Create or refresh the grant. Re-granting updates granted_at and expires_at."""
        async with self._uow_factory() as uow:
            user = await uow.users.get_by_id(user_id)
            if not user:
                raise NotFoundError("User", user_id)
            permission = await uow.permissions.get_by_id(permission_id)
            if not permission:
                raise NotFoundError("Permission", permission_id)

            grant = await uow.user_permissions.upsert(
                UserPermission(
                    user_id=user_id,
                    permission_id=permission_id,
                    granted_at=datetime.now(UTC),
                    granted_by=granted_by,
                    expires_at=expires_at,
                )
            )
            grant.permission = permission

        self._permission_cache.invalidate(user_id)
        logger.info(
            "Granted permission %s to user %s by %s", permission.identifier, user_id, granted_by
        )
        return grant
