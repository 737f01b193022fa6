"""PostgreSQL permission repository implementation."""

from collections.abc import Sequence
from uuid import UUID

from psycopg import AsyncConnection

from rolegate.domain.entities import Permission

PERMISSION_COLUMNS = "id, identifier, name, category, description, active"


def permission_from_row(r: Sequence) -> Permission:
    """Build Permission from a row laid out as PERMISSION_COLUMNS."""
    return Permission(
        id=r[0],
        identifier=r[1],
        name=r[2],
        category=r[3],
        description=r[4],
        active=r[5],
    )


class PostgresPermissionRepository:
    """Permission repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, permission_id: UUID) -> Permission | None:
        """Get permission by id."""
        cur = await self._conn.execute(
            f"SELECT {PERMISSION_COLUMNS} FROM permission WHERE id = %s",
            (permission_id,),
        )
        r = await cur.fetchone()
        return permission_from_row(r) if r else None

    async def get_by_identifier(self, identifier: str) -> Permission | None:
        """Get permission by its "resource:action" identifier."""
        cur = await self._conn.execute(
            f"SELECT {PERMISSION_COLUMNS} FROM permission WHERE identifier = %s",
            (identifier,),
        )
        r = await cur.fetchone()
        return permission_from_row(r) if r else None

    async def list_active(self, category: str | None = None) -> list[Permission]:
        """List active permissions, optionally within one category."""
        if category is None:
            cur = await self._conn.execute(
                f"SELECT {PERMISSION_COLUMNS} FROM permission WHERE active "
                "ORDER BY category, identifier"
            )
        else:
            cur = await self._conn.execute(
                f"SELECT {PERMISSION_COLUMNS} FROM permission WHERE active AND category = %s "
                "ORDER BY identifier",
                (category,),
            )
        rows = await cur.fetchall()
        return [permission_from_row(r) for r in rows]

    async def list_by_ids(self, permission_ids: Sequence[UUID]) -> list[Permission]:
        """List permissions whose id is in permission_ids."""
        if not permission_ids:
            return []
        cur = await self._conn.execute(
            f"SELECT {PERMISSION_COLUMNS} FROM permission WHERE id = ANY(%s) ORDER BY identifier",
            (list(permission_ids),),
        )
        rows = await cur.fetchall()
        return [permission_from_row(r) for r in rows]

    async def create(self, permission: Permission) -> Permission:
        """Create permission."""
        await self._conn.execute(
            f"INSERT INTO permission ({PERMISSION_COLUMNS}) VALUES (%s, %s, %s, %s, %s, %s)",
            (
                permission.id,
                permission.identifier,
                permission.name,
                permission.category,
                permission.description,
                permission.active,
            ),
        )
        return permission

    async def update(self, permission: Permission) -> None:
        """Update every mutable column of the permission."""
        await self._conn.execute(
            "UPDATE permission SET identifier=%s, name=%s, category=%s, description=%s, "
            "active=%s WHERE id=%s",
            (
                permission.identifier,
                permission.name,
                permission.category,
                permission.description,
                permission.active,
                permission.id,
            ),
        )

    async def delete(self, permission_id: UUID) -> bool:
        """Delete permission; role links and direct grants cascade."""
        cur = await self._conn.execute(
            "DELETE FROM permission WHERE id = %s",
            (permission_id,),
        )
        return cur.rowcount > 0
