"""PostgreSQL async connection pool for the permission store."""

from psycopg_pool import AsyncConnectionPool

from rolegate.config import Settings


def create_pool(settings: Settings) -> AsyncConnectionPool:
    """Pool sized from settings, created closed.

    PoolLifespanMiddleware opens it on ASGI startup. The resolver draws two
    connections per cache miss, so max_size bounds concurrent resolutions.
    """
    return AsyncConnectionPool(
        conninfo=settings.database_url,
        min_size=settings.database_pool_min_size,
        max_size=settings.database_pool_max_size,
        name="rolegate",
        open=False,
    )
