"""Create permission use case."""

import logging
from uuid import uuid4

from rolegate.application.ports import PermissionCacheInvalidator
from rolegate.domain.entities import Permission
from rolegate.domain.exceptions import ConflictError, ValidationError
from rolegate.domain.value_objects import is_valid_identifier

logger = logging.getLogger(__name__)


class CreatePermissionUseCase:
    """Register a new permission in the catalogue."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_cache: PermissionCacheInvalidator,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_cache = permission_cache

    async def execute(
        self,
        identifier: str,
        name: str,
        category: str,
        description: str | None = None,
    ) -> Permission:
        """Create permission. identifier must be "*" or "resource:action"."""
        identifier = (identifier or "").strip()
        if not is_valid_identifier(identifier):
            raise ValidationError('Identifier must follow the pattern "resource:action"')
        if not (name or "").strip():
            raise ValidationError("Permission name is required")
        if not (category or "").strip():
            raise ValidationError("Permission category is required")

        async with self._uow_factory() as uow:
            if await uow.permissions.get_by_identifier(identifier):
                raise ConflictError(f"Permission {identifier} already exists")
            permission = await uow.permissions.create(
                Permission(
                    id=uuid4(),
                    identifier=identifier,
                    name=name.strip(),
                    category=category.strip(),
                    description=description,
                )
            )

        self._permission_cache.invalidate_all()
        logger.info("Created permission %s", identifier)
        return permission
