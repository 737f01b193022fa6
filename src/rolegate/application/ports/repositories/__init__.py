"""Repository ports."""

from rolegate.application.ports.repositories.permission_repository import (
    PermissionRepository,
)
from rolegate.application.ports.repositories.role_repository import RoleRepository
from rolegate.application.ports.repositories.user_permission_repository import (
    UserPermissionRepository,
)
from rolegate.application.ports.repositories.user_repository import UserRepository
from rolegate.application.ports.repositories.user_role_repository import (
    UserRoleRepository,
)

__all__ = [
    "PermissionRepository",
    "RoleRepository",
    "UserPermissionRepository",
    "UserRepository",
    "UserRoleRepository",
]
