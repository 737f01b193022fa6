"""Delete permission use case."""

import logging
from uuid import UUID

from rolegate.application.ports import PermissionCacheInvalidator
from rolegate.domain.exceptions import NotFoundError

logger = logging.getLogger(__name__)


class DeletePermissionUseCase:
    """Remove a permission together with its role links and direct grants."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_cache: PermissionCacheInvalidator,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_cache = permission_cache

    async def execute(self, permission_id: UUID) -> None:
        async with self._uow_factory() as uow:
            deleted = await uow.permissions.delete(permission_id)
            if not deleted:
                raise NotFoundError("Permission", permission_id)

        self._permission_cache.invalidate_all()
        logger.info("Deleted permission %s", permission_id)
