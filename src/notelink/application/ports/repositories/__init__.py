"""Repository ports."""

from notelink.application.ports.repositories.note_chunk_repository import (
    NoteChunkRepository,
)
from notelink.application.ports.repositories.note_repository import NoteRepository

__all__ = [
    "NoteChunkRepository",
    "NoteRepository",
]
