"""PostgreSQL user repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from rolegate.domain.entities import User


class PostgresUserRepository:
    """User repository implementation - read-only."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, user_id: str) -> User | None:
        """Get user by id."""
        cur = await self._conn.execute(
            "SELECT id, email, login, name, active FROM app_user WHERE id = %s",
            (user_id,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return User(id=r[0], email=r[1], login=r[2], name=r[3], active=r[4])

    async def list_by_role(self, role_id: UUID) -> list[User]:
        """List users assigned the role."""
        cur = await self._conn.execute(
            "SELECT u.id, u.email, u.login, u.name, u.active "
            "FROM app_user u JOIN user_role ur ON ur.user_id = u.id "
            "WHERE ur.role_id = %s ORDER BY u.name, u.id",
            (role_id,),
        )
        rows = await cur.fetchall()
        return [User(id=r[0], email=r[1], login=r[2], name=r[3], active=r[4]) for r in rows]
