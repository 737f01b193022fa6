"""Permission repository port."""

from collections.abc import Sequence
from typing import Protocol
from uuid import UUID

from rolegate.domain.entities import Permission


class PermissionRepository(Protocol):
    """Port for permission persistence."""

    async def get_by_id(self, permission_id: UUID) -> Permission | None: ...

    async def get_by_identifier(self, identifier: str) -> Permission | None: ...

    async def list_active(self, category: str | None = None) -> list[Permission]: ...

    async def list_by_ids(self, permission_ids: Sequence[UUID]) -> list[Permission]: ...

    async def create(self, permission: Permission) -> Permission: ...

    async def update(self, permission: Permission) -> None: ...

    async def delete(self, permission_id: UUID) -> bool: ...
