"""Health check endpoints."""

import falcon.asgi
from psycopg_pool import AsyncConnectionPool

from notelink.infrastructure.tasks.enrichment_queue import EnrichmentQueue


class HealthResource:
    """Health and readiness endpoints."""

    def __init__(
        self,
        pool: AsyncConnectionPool | None = None,
        enrichment_queue: EnrichmentQueue | None = None,
    ) -> None:
        self._pool = pool
        self._enrichment_queue = enrichment_queue

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /v1/health - liveness."""
        resp.media = {"status": "ok"}
        resp.status = falcon.HTTP_200

    async def on_get_ready(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /v1/health/ready - database reachable and enrichment workers up."""
        if self._enrichment_queue is not None and not self._enrichment_queue.running:
            resp.media = {"status": "unavailable", "error": "enrichment workers not running"}
            resp.status = falcon.HTTP_503
            return
        if self._pool is not None:
            try:
                async with self._pool.connection(timeout=2.0) as conn:
                    await conn.execute("SELECT 1")
            except Exception as e:
                resp.media = {"status": "unavailable", "error": type(e).__name__}
                resp.status = falcon.HTTP_503
                return
        resp.media = {"status": "ready"}
        resp.status = falcon.HTTP_200
