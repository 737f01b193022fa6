"""UserRole entity - role assigned to a user."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from rolegate.domain.entities.role import Role


@dataclass
class UserRole:
    """Role assignment with provenance and optional expiry.

    role is populated when the store loads the relation.
    """

    user_id: str
    role_id: UUID
    assigned_at: datetime
    assigned_by: str | None = None
    expires_at: datetime | None = None
    role: Role | None = None

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at is not None and self.expires_at <= now
