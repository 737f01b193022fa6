"""Unit of Work port - transactional boundary."""

from collections.abc import AsyncIterator
from typing import Protocol

from rolegate.application.ports.repositories.permission_repository import (
    PermissionRepository,
)
from rolegate.application.ports.repositories.role_repository import RoleRepository
from rolegate.application.ports.repositories.user_permission_repository import (
    UserPermissionRepository,
)
from rolegate.application.ports.repositories.user_repository import UserRepository
from rolegate.application.ports.repositories.user_role_repository import (
    UserRoleRepository,
)


class UnitOfWork(Protocol):
    """Unit of Work - manages transaction and repository access."""

    @property
    def permissions(self) -> PermissionRepository: ...

    @property
    def roles(self) -> RoleRepository: ...

    @property
    def user_roles(self) -> UserRoleRepository: ...

    @property
    def user_permissions(self) -> UserPermissionRepository: ...

    @property
    def users(self) -> UserRepository: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


class UnitOfWorkFactory(Protocol):
    """Factory for creating UnitOfWork instances."""

    async def __call__(self) -> AsyncIterator[UnitOfWork]: ...
