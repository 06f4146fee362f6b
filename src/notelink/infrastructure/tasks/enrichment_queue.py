"""Background enrichment queue - runs EnrichNoteUseCase off the request path."""

import asyncio
import logging
from uuid import UUID

from notelink.application.use_cases.enrichment.enrich_note import EnrichNoteUseCase

logger = logging.getLogger(__name__)


class EnrichmentQueue:
    """asyncio worker pool over a queue of note ids.

    At most one run per note is in flight. A note already waiting in the queue
    is not queued twice; a note scheduled while it is running is queued again
    once that run finishes. A failed run is logged and the worker moves on.
    """

    def __init__(self, enrich_note: EnrichNoteUseCase, workers: int = 2) -> None:
        self._enrich_note = enrich_note
        self._worker_count = max(1, workers)
        self._queue: asyncio.Queue[UUID] = asyncio.Queue()
        self._pending: set[UUID] = set()
        self._in_flight: set[UUID] = set()
        self._rerun: set[UUID] = set()
        self._workers: list[asyncio.Task] = []

    @property
    def running(self) -> bool:
        return any(not task.done() for task in self._workers)

    def schedule(self, note_id: UUID) -> None:
        """Queue note_id for enrichment."""
        if note_id in self._in_flight:
            logger.debug("note %s is being enriched, will run again after", note_id)
            self._rerun.add(note_id)
            return
        if note_id in self._pending:
            logger.debug("note %s already queued for enrichment", note_id)
            return
        self._pending.add(note_id)
        self._queue.put_nowait(note_id)

    async def start(self) -> None:
        if self._workers:
            return
        self._workers = [
            asyncio.create_task(self._worker(i), name=f"enrichment-{i}")
            for i in range(self._worker_count)
        ]
        logger.info("enrichment queue started with %d workers", self._worker_count)

    async def stop(self) -> None:
        for task in self._workers:
            task.cancel()
        await asyncio.gather(*self._workers, return_exceptions=True)
        self._workers = []
        logger.info("enrichment queue stopped")

    async def join(self) -> None:
        """Wait until every queued note has been processed."""
        await self._queue.join()

    async def _worker(self, index: int) -> None:
        while True:
            note_id = await self._queue.get()
            self._pending.discard(note_id)
            self._in_flight.add(note_id)
            try:
                report = await self._enrich_note.execute(note_id)
                if report is not None and report.failed:
                    logger.info(
                        "note %s enriched with failures: %s", note_id, sorted(report.failed)
                    )
            except Exception:
                logger.exception("enrichment of note %s failed (worker %d)", note_id, index)
            finally:
                self._in_flight.discard(note_id)
                if note_id in self._rerun:
                    self._rerun.discard(note_id)
                    self._pending.add(note_id)
                    self._queue.put_nowait(note_id)
                self._queue.task_done()
