"""Update permission use case."""

import logging
from uuid import UUID

from rolegate.application.ports import PermissionCacheInvalidator
from rolegate.domain.entities import Permission
from rolegate.domain.exceptions import ConflictError, NotFoundError, ValidationError
from rolegate.domain.value_objects import is_valid_identifier

logger = logging.getLogger(__name__)


class UpdatePermissionUseCase:
    """Edit a catalogue entry. Renaming or deactivating can change any user's set."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_cache: PermissionCacheInvalidator,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_cache = permission_cache

    async def execute(
        self,
        permission_id: UUID,
        identifier: str | None = None,
        name: str | None = None,
        category: str | None = None,
        description: str | None = None,
        active: bool | None = None,
    ) -> Permission:
        """Apply the given changes; None leaves a field untouched."""
        async with self._uow_factory() as uow:
            permission = await uow.permissions.get_by_id(permission_id)
            if not permission:
                raise NotFoundError("Permission", permission_id)

            if identifier is not None:
                identifier = identifier.strip()
                if not is_valid_identifier(identifier):
                    raise ValidationError('Identifier must follow the pattern "resource:action"')
                if identifier != permission.identifier:
                    if await uow.permissions.get_by_identifier(identifier):
                        raise ConflictError(f"Permission {identifier} already exists")
                    permission.identifier = identifier
            if name is not None:
                if not name.strip():
                    raise ValidationError("Permission name is required")
                permission.name = name.strip()
            if category is not None:
                if not category.strip():
                    raise ValidationError("Permission category is required")
                permission.category = category.strip()
            if description is not None:
                permission.description = description
            if active is not None:
                permission.active = active

            await uow.permissions.update(permission)

        self._permission_cache.invalidate_all()
        logger.info("Updated permission %s (%s)", permission_id, permission.identifier)
        return permission
