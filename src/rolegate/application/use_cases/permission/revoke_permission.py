"""Revoke permission use case."""

import logging
from uuid import UUID

from rolegate.application.ports import PermissionCacheInvalidator
from rolegate.domain.exceptions import NotFoundError

logger = logging.getLogger(__name__)


class RevokePermissionUseCase:
    """Remove a direct permission grant from a user."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_cache: PermissionCacheInvalidator,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_cache = permission_cache

    async def execute(self, user_id: str, permission_id: UUID) -> None:
        """Delete the grant. Raises NotFoundError when it does not exist."""
        async with self._uow_factory() as uow:
            deleted = await uow.user_permissions.delete(user_id, permission_id)
            if not deleted:
                raise NotFoundError("UserPermission", f"{user_id}/{permission_id}")

        self._permission_cache.invalidate(user_id)
        logger.info("Revoked permission %s from user %s", permission_id, user_id)
