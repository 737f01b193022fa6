"""PostgreSQL user-permission repository implementation."""

from collections.abc import Sequence
from datetime import datetime
from uuid import UUID

from psycopg import AsyncConnection

from rolegate.domain.entities import UserPermission
from rolegate.infrastructure.persistence.postgres.permission_repository import (
    permission_from_row,
)

_GRANT_COLUMNS = "user_id, permission_id, granted_at, granted_by, expires_at"


def _grant_from_row(r: Sequence) -> UserPermission:
    return UserPermission(
        user_id=r[0],
        permission_id=r[1],
        granted_at=r[2],
        granted_by=r[3],
        expires_at=r[4],
    )


class PostgresUserPermissionRepository:
    """UserPermission repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get(self, user_id: str, permission_id: UUID) -> UserPermission | None:
        """Get grant by key."""
        cur = await self._conn.execute(
            f"SELECT {_GRANT_COLUMNS} FROM user_permission "
            "WHERE user_id = %s AND permission_id = %s",
            (user_id, permission_id),
        )
        r = await cur.fetchone()
        return _grant_from_row(r) if r else None

    async def list_active_by_user(self, user_id: str, now: datetime) -> list[UserPermission]:
        """List grants with no expiry or expiring after now, with their permission."""
        cur = await self._conn.execute(
            "SELECT up.user_id, up.permission_id, up.granted_at, up.granted_by, up.expires_at, "
            "p.id, p.identifier, p.name, p.category, p.description, p.active "
            "FROM user_permission up JOIN permission p ON p.id = up.permission_id "
            "WHERE up.user_id = %s AND (up.expires_at IS NULL OR up.expires_at > %s) "
            "ORDER BY p.identifier",
            (user_id, now),
        )
        grants = []
        for r in await cur.fetchall():
            grant = _grant_from_row(r)
            grant.permission = permission_from_row(r[5:])
            grants.append(grant)
        return grants

    async def upsert(self, grant: UserPermission) -> UserPermission:
        """Insert grant, or refresh granted_at and expires_at if it exists."""
        cur = await self._conn.execute(
            f"INSERT INTO user_permission ({_GRANT_COLUMNS}) VALUES (%s, %s, %s, %s, %s) "
            "ON CONFLICT (user_id, permission_id) DO UPDATE "
            "SET granted_at = EXCLUDED.granted_at, expires_at = EXCLUDED.expires_at "
            f"RETURNING {_GRANT_COLUMNS}",
            (
                grant.user_id,
                grant.permission_id,
                grant.granted_at,
                grant.granted_by,
                grant.expires_at,
            ),
        )
        r = await cur.fetchone()
        return _grant_from_row(r)

    async def delete(self, user_id: str, permission_id: UUID) -> bool:
        """Delete grant. Returns False when nothing matched."""
        cur = await self._conn.execute(
            "DELETE FROM user_permission WHERE user_id = %s AND permission_id = %s",
            (user_id, permission_id),
        )
        return cur.rowcount > 0
