"""In-memory event subscribers per note id.

Enrichment publishes "processed" and "error" events; every open SSE stream
for that note receives them through its own queue.
"""

import asyncio
import logging
from typing import Any
from uuid import UUID

logger = logging.getLogger(__name__)

NoteEvent = tuple[str, dict[str, Any]]


class NoteEventBus:
    """Publish/subscribe channel keyed by note id."""

    def __init__(self, max_queue_size: int = 100) -> None:
        self._max_queue_size = max_queue_size
        self._subscribers: dict[UUID, set[asyncio.Queue[NoteEvent]]] = {}

    def subscribe(self, note_id: UUID) -> asyncio.Queue[NoteEvent]:
        """Open a subscription; the caller must unsubscribe when done."""
        queue: asyncio.Queue[NoteEvent] = asyncio.Queue(maxsize=self._max_queue_size)
        self._subscribers.setdefault(note_id, set()).add(queue)
        return queue

    def unsubscribe(self, note_id: UUID, queue: asyncio.Queue[NoteEvent]) -> None:
        subs = self._subscribers.get(note_id)
        if subs is None:
            return
        subs.discard(queue)
        if not subs:
            del self._subscribers[note_id]

    def subscriber_count(self, note_id: UUID) -> int:
        return len(self._subscribers.get(note_id, ()))

    def publish(self, note_id: UUID, event: str, data: dict[str, Any]) -> None:
        """Deliver event to every subscriber of note_id. Slow subscribers drop events."""
        for queue in list(self._subscribers.get(note_id, ())):
            try:
                queue.put_nowait((event, data))
            except asyncio.QueueFull:
                logger.warning("dropping %s event for note %s: subscriber queue full", event, note_id)
