"""PostgreSQL Unit of Work implementation."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import psycopg
from psycopg import errors
from psycopg_pool import AsyncConnectionPool

from rolegate.domain.exceptions import ConflictError, StoreError
from rolegate.infrastructure.persistence.postgres.permission_repository import (
    PostgresPermissionRepository,
)
from rolegate.infrastructure.persistence.postgres.role_repository import (
    PostgresRoleRepository,
)
from rolegate.infrastructure.persistence.postgres.user_permission_repository import (
    PostgresUserPermissionRepository,
)
from rolegate.infrastructure.persistence.postgres.user_repository import (
    PostgresUserRepository,
)
from rolegate.infrastructure.persistence.postgres.user_role_repository import (
    PostgresUserRoleRepository,
)

logger = logging.getLogger(__name__)


class PostgresUnitOfWork:
    """PostgreSQL Unit of Work - one connection, one transaction."""

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool
        self._conn: psycopg.AsyncConnection | None = None
        self._conn_cm: object | None = None

    async def __aenter__(self) -> "PostgresUnitOfWork":
        self._conn_cm = self._pool.connection()
        self._conn = await self._conn_cm.__aenter__()
        self._permissions = PostgresPermissionRepository(self._conn)
        self._roles = PostgresRoleRepository(self._conn)
        self._user_roles = PostgresUserRoleRepository(self._conn)
        self._user_permissions = PostgresUserPermissionRepository(self._conn)
        self._users = PostgresUserRepository(self._conn)
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        if exc_type and self._conn:
            await self._conn.rollback()
        if self._conn_cm:
            await self._conn_cm.__aexit__(exc_type, exc_val, exc_tb)

    @property
    def permissions(self) -> PostgresPermissionRepository:
        return self._permissions

    @property
    def roles(self) -> PostgresRoleRepository:
        return self._roles

    @property
    def user_roles(self) -> PostgresUserRoleRepository:
        return self._user_roles

    @property
    def user_permissions(self) -> PostgresUserPermissionRepository:
        return self._user_permissions

    @property
    def users(self) -> PostgresUserRepository:
        return self._users

    async def commit(self) -> None:
        if self._conn:
            await self._conn.commit()

    async def rollback(self) -> None:
        if self._conn:
            await self._conn.rollback()


def translate_error(exc: psycopg.Error) -> StoreError:
    """Map a driver error onto the domain's store errors."""
    if isinstance(exc, errors.UniqueViolation):
        return ConflictError(str(exc).strip())
    return StoreError(str(exc).strip() or type(exc).__name__)


def create_uow_factory(pool: AsyncConnectionPool) -> object:
    """Create UnitOfWork factory (async context manager).

    Commits when the block exits cleanly. Driver errors, including those
    raised on connect or commit, surface as StoreError.
    """

    @asynccontextmanager
    async def factory() -> AsyncIterator[PostgresUnitOfWork]:
        try:
            async with PostgresUnitOfWork(pool) as uow:
                try:
                    yield uow
                    await uow.commit()
                except BaseException:
                    await uow.rollback()
                    raise
        except psycopg.Error as e:
            logger.error("Store operation failed: %s", e)
            raise translate_error(e) from e

    return factory
