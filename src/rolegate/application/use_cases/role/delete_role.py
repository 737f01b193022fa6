"""Delete role use case."""

import logging
from uuid import UUID

from rolegate.application.ports import PermissionCacheInvalidator
from rolegate.domain.exceptions import NotFoundError

logger = logging.getLogger(__name__)


class DeleteRoleUseCase:
    """Delete a role and its assignments."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_cache: PermissionCacheInvalidator,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_cache = permission_cache

    async def execute(self, role_id: UUID) -> None:
        """Delete the role. Users who held it are invalidated after commit."""
        async with self._uow_factory() as uow:
            affected = await uow.user_roles.list_user_ids_by_role(role_id)
            deleted = await uow.roles.delete(role_id)
            if not deleted:
                raise NotFoundError("Role", role_id)

        for user_id in affected:
            self._permission_cache.invalidate(user_id)
        logger.info("Deleted role %s, invalidated %d users", role_id, len(affected))
