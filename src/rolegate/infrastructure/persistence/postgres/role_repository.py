"""PostgreSQL role repository implementation."""

from collections.abc import Sequence
from uuid import UUID

from psycopg import AsyncConnection

from rolegate.domain.entities import Permission, Role
from rolegate.infrastructure.persistence.postgres.permission_repository import (
    permission_from_row,
)

_ROLE_COLUMNS = "id, name, description, active"


class PostgresRoleRepository:
    """Role repository implementation. Roles carry their RolePermission links."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, role_id: UUID) -> Role | None:
        """Get role by id."""
        cur = await self._conn.execute(
            f"SELECT {_ROLE_COLUMNS} FROM role WHERE id = %s",
            (role_id,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return (await self._with_permissions([r]))[0]

    async def get_by_name(self, name: str) -> Role | None:
        """Get role by name."""
        cur = await self._conn.execute(
            f"SELECT {_ROLE_COLUMNS} FROM role WHERE name = %s",
            (name,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return (await self._with_permissions([r]))[0]

    async def list_active(self) -> list[Role]:
        """List active roles."""
        cur = await self._conn.execute(
            f"SELECT {_ROLE_COLUMNS} FROM role WHERE active ORDER BY name"
        )
        rows = await cur.fetchall()
        return await self._with_permissions(rows)

    async def create(self, role: Role) -> Role:
        """Create role and its permission links."""
        await self._conn.execute(
            f"INSERT INTO role ({_ROLE_COLUMNS}) VALUES (%s, %s, %s, %s)",
            (role.id, role.name, role.description, role.active),
        )
        await self._insert_links(role.id, [p.id for p in role.permissions])
        return role

    async def update(self, role: Role) -> None:
        """Update role name, description and active flag."""
        await self._conn.execute(
            "UPDATE role SET name=%s, description=%s, active=%s WHERE id=%s",
            (role.name, role.description, role.active, role.id),
        )

    async def replace_permissions(self, role_id: UUID, permission_ids: Sequence[UUID]) -> None:
        """Delete every permission link of the role, then insert permission_ids."""
        await self._conn.execute(
            "DELETE FROM role_permission WHERE role_id = %s",
            (role_id,),
        )
        await self._insert_links(role_id, permission_ids)

    async def delete(self, role_id: UUID) -> bool:
        """Delete role; its permission links and user assignments cascade."""
        cur = await self._conn.execute(
            "DELETE FROM role WHERE id = %s",
            (role_id,),
        )
        return cur.rowcount > 0

    async def _insert_links(self, role_id: UUID, permission_ids: Sequence[UUID]) -> None:
        if not permission_ids:
            return
        async with self._conn.cursor() as cur:
            await cur.executemany(
                "INSERT INTO role_permission (role_id, permission_id) VALUES (%s, %s)",
                [(role_id, pid) for pid in permission_ids],
            )

    async def _with_permissions(self, rows: Sequence[Sequence]) -> list[Role]:
        roles = [
            Role(id=r[0], name=r[1], description=r[2], active=r[3]) for r in rows
        ]
        if not roles:
            return roles
        cur = await self._conn.execute(
            "SELECT rp.role_id, p.id, p.identifier, p.name, p.category, p.description, p.active "
            "FROM role_permission rp JOIN permission p ON p.id = rp.permission_id "
            "WHERE rp.role_id = ANY(%s) ORDER BY p.identifier",
            ([role.id for role in roles],),
        )
        by_role: dict[UUID, list[Permission]] = {}
        for r in await cur.fetchall():
            by_role.setdefault(r[0], []).append(permission_from_row(r[1:]))
        for role in roles:
            role.permissions = by_role.get(role.id, [])
        return roles
