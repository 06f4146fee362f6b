"""Domain entities."""

from notelink.domain.entities.note import Note
from notelink.domain.entities.note_chunk import NoteChunk

__all__ = [
    "Note",
    "NoteChunk",
]
