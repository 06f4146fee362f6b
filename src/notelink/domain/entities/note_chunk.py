"""Note chunk entity - text segment with embedding."""

from dataclasses import dataclass
from uuid import UUID


@dataclass
class NoteChunk:
    """Note chunk - text segment with optional vector embedding."""

    id: UUID
    note_id: UUID
    order: int
    text: str
    embedding: list[float] | None = None
