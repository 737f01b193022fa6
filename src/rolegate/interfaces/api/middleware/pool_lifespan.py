"""Lifespan middleware - owns the connection pool and permission cache."""

import logging
from typing import Any

from psycopg_pool import AsyncConnectionPool

from rolegate.infrastructure.permission.permission_cache import PermissionCache

logger = logging.getLogger(__name__)


class PoolLifespanMiddleware:
    """Opens the pool on startup; closes it and drops cached permissions on shutdown."""

    def __init__(self, pool: AsyncConnectionPool, permission_cache: PermissionCache) -> None:
        self._pool = pool
        self._permission_cache = permission_cache

    async def process_startup(
        self, scope: dict[str, Any], event: dict[str, Any]
    ) -> None:
        """Open pool when ASGI server starts."""
        await self._pool.open()
        logger.info(
            "Connection pool open (min=%d, max=%d)", self._pool.min_size, self._pool.max_size
        )

    async def process_shutdown(
        self, scope: dict[str, Any], event: dict[str, Any]
    ) -> None:
        """Close pool when ASGI server shuts down."""
        self._permission_cache.invalidate_all()
        await self._pool.close()
        logger.info("Connection pool closed")
