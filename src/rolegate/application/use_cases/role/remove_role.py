"""Remove role use case."""

import logging
from uuid import UUID

from rolegate.application.ports import PermissionCacheInvalidator
from rolegate.domain.exceptions import NotFoundError

logger = logging.getLogger(__name__)


class RemoveRoleUseCase:
    """Remove a role assignment from a user."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_cache: PermissionCacheInvalidator,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_cache = permission_cache

    async def execute(self, user_id: str, role_id: UUID) -> None:
        """Delete the assignment. Raises NotFoundError when it does not exist."""
        async with self._uow_factory() as uow:
            deleted = await uow.user_roles.delete(user_id, role_id)
            if not deleted:
                raise NotFoundError("UserRole", f"{user_id}/{role_id}")

        self._permission_cache.invalidate(user_id)
        logger.info("Removed role %s from user %s", role_id, user_id)
