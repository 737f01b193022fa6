"""User repository port."""

from typing import Protocol
from uuid import UUID

from rolegate.domain.entities import User


class UserRepository(Protocol):
    """Port for reading users."""

    async def get_by_id(self, user_id: str) -> User | None: ...

    async def list_by_role(self, role_id: UUID) -> list[User]: ...
