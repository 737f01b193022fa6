"""Detailed view of where a user's permissions come from."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from rolegate.domain.entities import Permission


@dataclass
class DirectPermissionDetail:
    """Direct grant with its provenance."""

    permission: Permission
    granted_at: datetime
    granted_by: str | None
    expires_at: datetime | None


@dataclass
class RolePermissionDetail:
    """Permissions contributed by one assigned role."""

    role_id: UUID
    role_name: str
    permissions: list[Permission] = field(default_factory=list)


@dataclass
class UserPermissionsDetail:
    user_id: str
    direct_permissions: list[DirectPermissionDetail] = field(default_factory=list)
    role_permissions: list[RolePermissionDetail] = field(default_factory=list)
