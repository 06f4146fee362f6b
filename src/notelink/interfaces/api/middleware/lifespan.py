"""Lifespan middleware - opens pool and starts workers on startup, reverses on shutdown."""

from typing import Any

from psycopg_pool import AsyncConnectionPool

from notelink.infrastructure.tasks.enrichment_queue import EnrichmentQueue


class LifespanMiddleware:
    """Owns the connection pool and the enrichment queue for the app's lifetime."""

    def __init__(
        self,
        pool: AsyncConnectionPool | None = None,
        enrichment_queue: EnrichmentQueue | None = None,
    ) -> None:
        self._pool = pool
        self._enrichment_queue = enrichment_queue

    async def process_startup(
        self, scope: dict[str, Any], event: dict[str, Any]
    ) -> None:
        """Open pool, then start enrichment workers."""
        if self._pool is not None:
            await self._pool.open()
        if self._enrichment_queue is not None:
            await self._enrichment_queue.start()

    async def process_shutdown(
        self, scope: dict[str, Any], event: dict[str, Any]
    ) -> None:
        """Stop workers before the pool they write through is closed."""
        if self._enrichment_queue is not None:
            await self._enrichment_queue.stop()
        if self._pool is not None:
            await self._pool.close()
