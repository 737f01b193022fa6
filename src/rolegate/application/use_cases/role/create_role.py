"""Create role use case."""

import logging
from collections.abc import Sequence
from uuid import UUID, uuid4

from rolegate.application.ports import PermissionCacheInvalidator
from rolegate.domain.entities import Role
from rolegate.domain.exceptions import ConflictError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


class CreateRoleUseCase:
    """Create a role with an initial permission set."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_cache: PermissionCacheInvalidator,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_cache = permission_cache

    async def execute(
        self,
        name: str,
        description: str | None = None,
        permission_ids: Sequence[UUID] = (),
    ) -> Role:
        """Create role. Every permission id must exist."""
        name = (name or "").strip()
        if not name:
            raise ValidationError("Role name is required")

        wanted = list(dict.fromkeys(permission_ids))
        async with self._uow_factory() as uow:
            if await uow.roles.get_by_name(name):
                raise ConflictError(f"Role {name} already exists")

            permissions = await uow.permissions.list_by_ids(wanted)
            found = {p.id for p in permissions}
            missing = [pid for pid in wanted if pid not in found]
            if missing:
                raise NotFoundError("Permission", missing[0])

            role = await uow.roles.create(
                Role(
                    id=uuid4(),
                    name=name,
                    description=description,
                    permissions=permissions,
                )
            )

        self._permission_cache.invalidate_all()
        logger.info("Created role %s with %d permissions", name, len(permissions))
        return role
