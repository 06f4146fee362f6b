"""PostgreSQL async connection pool."""

import logging

from psycopg_pool import AsyncConnectionPool

logger = logging.getLogger(__name__)


def create_pool(
    conninfo: str,
    min_size: int = 2,
    max_size: int = 10,
    name: str = "notelink",
) -> AsyncConnectionPool:
    """Build a closed pool; LifespanMiddleware (or a script) opens it."""
    logger.debug("creating pool %s (min=%d max=%d)", name, min_size, max_size)
    return AsyncConnectionPool(
        conninfo=conninfo,
        min_size=max(1, min_size),
        max_size=max(min_size, max_size),
        name=name,
        open=False,
    )
