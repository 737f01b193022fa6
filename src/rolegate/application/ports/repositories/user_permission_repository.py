"""UserPermission repository port."""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from rolegate.domain.entities import UserPermission


class UserPermissionRepository(Protocol):
    """Port for direct user permission grants."""

    async def get(self, user_id: str, permission_id: UUID) -> UserPermission | None: ...

    async def list_active_by_user(self, user_id: str, now: datetime) -> list[UserPermission]: ...

    async def upsert(self, grant: UserPermission) -> UserPermission: ...

    async def delete(self, user_id: str, permission_id: UUID) -> bool: ...
