"""UserPermission entity - permission granted directly to a user."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from rolegate.domain.entities.permission import Permission


@dataclass
class UserPermission:
    """Direct grant with provenance and optional expiry.

    permission is populated when the store loads the relation.
    """

    user_id: str
    permission_id: UUID
    granted_at: datetime
    granted_by: str | None = None
    expires_at: datetime | None = None
    permission: Permission | None = None

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at is not None and self.expires_at <= now
