"""Note chunk repository port."""

from typing import Protocol
from uuid import UUID

from notelink.domain.entities import NoteChunk


class NoteChunkRepository(Protocol):
    """Port for note chunk persistence."""

    async def replace_for_note(self, note_id: UUID, chunks: list[NoteChunk]) -> list[NoteChunk]: ...

    async def get_by_note_id(self, note_id: UUID) -> list[NoteChunk]: ...

    async def get_by_note_ids(self, note_ids: list[UUID]) -> dict[UUID, list[NoteChunk]]: ...

    async def delete_by_note_id(self, note_id: UUID) -> None: ...
