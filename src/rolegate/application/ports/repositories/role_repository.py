"""Role repository port."""

from collections.abc import Sequence
from typing import Protocol
from uuid import UUID

from rolegate.domain.entities import Role


class RoleRepository(Protocol):
    """Port for role persistence. Roles are returned with their permissions."""

    async def get_by_id(self, role_id: UUID) -> Role | None: ...

    async def get_by_name(self, name: str) -> Role | None: ...

    async def list_active(self) -> list[Role]: ...

    async def create(self, role: Role) -> Role: ...

    async def update(self, role: Role) -> None: ...

    async def replace_permissions(self, role_id: UUID, permission_ids: Sequence[UUID]) -> None: ...

    async def delete(self, role_id: UUID) -> bool: ...
