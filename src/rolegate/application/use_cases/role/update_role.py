"""Update role use case - basic fields and permission-set replacement."""

import logging
from collections.abc import Sequence
from uuid import UUID

from rolegate.application.ports import PermissionCacheInvalidator
from rolegate.domain.entities import Role
from rolegate.domain.exceptions import ConflictError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


class UpdateRoleUseCase:
    """Update a role and, optionally, replace its permissions."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_cache: PermissionCacheInvalidator,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_cache = permission_cache

    async def execute(
        self,
        role_id: UUID,
        name: str | None = None,
        active: bool | None = None,
        permission_ids: Sequence[UUID] | None = None,
    ) -> Role:
        """Apply the given changes; None leaves a field untouched.

        Replacing permissions deletes every link of the role and inserts the
        new set within the same transaction. Users holding the role are
        invalidated after commit.
        """
        async with self._uow_factory() as uow:
            role = await uow.roles.get_by_id(role_id)
            if not role:
                raise NotFoundError("Role", role_id)

            if name is not None:
                name = name.strip()
                if not name:
                    raise ValidationError("Role name is required")
                if name != role.name:
                    existing = await uow.roles.get_by_name(name)
                    if existing and existing.id != role_id:
                        raise ConflictError(f"Role {name} already exists")
                    role.name = name
            if active is not None:
                role.active = active
            await uow.roles.update(role)

            if permission_ids is not None:
                wanted = list(dict.fromkeys(permission_ids))
                permissions = await uow.permissions.list_by_ids(wanted)
                found = {p.id for p in permissions}
                missing = [pid for pid in wanted if pid not in found]
                if missing:
                    raise NotFoundError("Permission", missing[0])
                await uow.roles.replace_permissions(role_id, wanted)

            affected = await uow.user_roles.list_user_ids_by_role(role_id)
            updated = await uow.roles.get_by_id(role_id)

        for user_id in affected:
            self._permission_cache.invalidate(user_id)
        logger.info("Updated role %s, invalidated %d users", role_id, len(affected))
        return updated
