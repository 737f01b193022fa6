"""PostgreSQL user-role repository implementation."""

from collections.abc import Sequence
from uuid import UUID

from psycopg import AsyncConnection

from rolegate.domain.entities import Role, UserRole
from rolegate.infrastructure.persistence.postgres.permission_repository import (
    permission_from_row,
)

_USER_ROLE_COLUMNS = "user_id, role_id, assigned_at, assigned_by, expires_at"


def _user_role_from_row(r: Sequence) -> UserRole:
    return UserRole(
        user_id=r[0],
        role_id=r[1],
        assigned_at=r[2],
        assigned_by=r[3],
        expires_at=r[4],
    )


class PostgresUserRoleRepository:
    """UserRole repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get(self, user_id: str, role_id: UUID) -> UserRole | None:
        """Get assignment by key."""
        cur = await self._conn.execute(
            f"SELECT {_USER_ROLE_COLUMNS} FROM user_role WHERE user_id = %s AND role_id = %s",
            (user_id, role_id),
        )
        r = await cur.fetchone()
        return _user_role_from_row(r) if r else None

    async def list_by_user(self, user_id: str) -> list[UserRole]:
        """List assignments of a user, each with its role and the role's permissions."""
        cur = await self._conn.execute(
            "SELECT ur.user_id, ur.role_id, ur.assigned_at, ur.assigned_by, ur.expires_at, "
            "r.name, r.description, r.active, "
            "p.id, p.identifier, p.name, p.category, p.description, p.active "
            "FROM user_role ur "
            "JOIN role r ON r.id = ur.role_id "
            "LEFT JOIN role_permission rp ON rp.role_id = r.id "
            "LEFT JOIN permission p ON p.id = rp.permission_id "
            "WHERE ur.user_id = %s "
            "ORDER BY r.name, p.identifier",
            (user_id,),
        )
        assignments: dict[UUID, UserRole] = {}
        for r in await cur.fetchall():
            assignment = assignments.get(r[1])
            if assignment is None:
                assignment = _user_role_from_row(r)
                assignment.role = Role(id=r[1], name=r[5], description=r[6], active=r[7])
                assignments[r[1]] = assignment
            if r[8] is not None:
                assignment.role.permissions.append(permission_from_row(r[8:]))
        return list(assignments.values())

    async def list_user_ids_by_role(self, role_id: UUID) -> list[str]:
        """List ids of users assigned the role."""
        cur = await self._conn.execute(
            "SELECT user_id FROM user_role WHERE role_id = %s",
            (role_id,),
        )
        rows = await cur.fetchall()
        return [r[0] for r in rows]

    async def upsert(self, user_role: UserRole) -> UserRole:
        """Insert assignment, or refresh assigned_at and expires_at if it exists."""
        cur = await self._conn.execute(
            f"INSERT INTO user_role ({_USER_ROLE_COLUMNS}) VALUES (%s, %s, %s, %s, %s) "
            "ON CONFLICT (user_id, role_id) DO UPDATE "
            "SET assigned_at = EXCLUDED.assigned_at, expires_at = EXCLUDED.expires_at "
            f"RETURNING {_USER_ROLE_COLUMNS}",
            (
                user_role.user_id,
                user_role.role_id,
                user_role.assigned_at,
                user_role.assigned_by,
                user_role.expires_at,
            ),
        )
        r = await cur.fetchone()
        return _user_role_from_row(r)

    async def delete(self, user_id: str, role_id: UUID) -> bool:
        """Delete assignment. Returns False when nothing matched."""
        cur = await self._conn.execute(
            "DELETE FROM user_role WHERE user_id = %s AND role_id = %s",
            (user_id, role_id),
        )
        return cur.rowcount > 0
