"""Note event publisher port - live per-note notifications."""

from typing import Any, Protocol
from uuid import UUID


class NoteEventPublisher(Protocol):
    """Port for publishing events to subscribers of a note."""

    def publish(self, note_id: UUID, event: str, data: dict[str, Any]) -> None: ...
