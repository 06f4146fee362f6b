"""Server-Sent Events for per-note enrichment updates."""

import asyncio
import json
from collections.abc import AsyncIterator
from uuid import UUID

import falcon.asgi

from notelink.infrastructure.events.note_event_bus import NoteEventBus
from notelink.interfaces.api.resources.notes import parse_note_id

KEEPALIVE_SECONDS = 15.0


def _sse_event(event: str, data: dict) -> bytes:
    """Format one Server-Sent Event (event + data)."""
    payload = json.dumps(data, ensure_ascii=False)
    return f"event: {event}\ndata: {payload}\n\n".encode("utf-8")


class NoteEventsResource:
    """GET /v1/notes/{note_id}/events - keepalive, processed and error events."""

    def __init__(self, event_bus: NoteEventBus, keepalive_seconds: float = KEEPALIVE_SECONDS) -> None:
        self._event_bus = event_bus
        self._keepalive_seconds = keepalive_seconds

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, note_id: str
    ) -> None:
        nid = parse_note_id(note_id)
        if nid is None:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid UUID"}
            return
        resp.status = falcon.HTTP_200
        resp.content_type = "text/event-stream"
        resp.cache_control = ["no-cache", "no-transform"]
        resp.set_header("X-Accel-Buffering", "no")
        resp.stream = self.stream_events(nid)

    async def stream_events(self, note_id: UUID) -> AsyncIterator[bytes]:
        """Yield SSE frames until the client goes away."""
        queue = self._event_bus.subscribe(note_id)
        try:
            yield _sse_event("keepalive", {"ok": True, "id": str(note_id)})
            while True:
                try:
                    event, data = await asyncio.wait_for(queue.get(), self._keepalive_seconds)
                except TimeoutError:
                    yield _sse_event("keepalive", {"ok": True})
                    continue
                yield _sse_event(event, data)
        finally:
            self._event_bus.unsubscribe(note_id, queue)
