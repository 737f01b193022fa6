"""UserRole repository port."""

from typing import Protocol
from uuid import UUID

from rolegate.domain.entities import UserRole


class UserRoleRepository(Protocol):
    """Port for user-role assignments."""

    async def get(self, user_id: str, role_id: UUID) -> UserRole | None: ...

    async def list_by_user(self, user_id: str) -> list[UserRole]: ...

    async def list_user_ids_by_role(self, role_id: UUID) -> list[str]: ...

    async def upsert(self, user_role: UserRole) -> UserRole: ...

    async def delete(self, user_id: str, role_id: UUID) -> bool: ...
