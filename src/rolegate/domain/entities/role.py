"""Role entity for RBAC."""

from dataclasses import dataclass, field
from uuid import UUID

from rolegate.domain.entities.permission import Permission


@dataclass
class Role:
    """Role - named bundle of permissions (RolePermission links)."""

    id: UUID
    name: str
    description: str | None = None
    active: bool = True
    permissions: list[Permission] = field(default_factory=list)

    @property
    def permission_identifiers(self) -> list[str]:
        return [p.identifier for p in self.permissions]
