"""Domain entities."""

from rolegate.domain.entities.permission import Permission
from rolegate.domain.entities.role import Role
from rolegate.domain.entities.user import User
from rolegate.domain.entities.user_permission import UserPermission
from rolegate.domain.entities.user_role import UserRole

__all__ = [
    "Permission",
    "Role",
    "User",
    "UserPermission",
    "UserRole",
]
