"""Note repository port."""

from typing import Protocol
from uuid import UUID

from notelink.domain.entities import Note
from notelink.domain.value_objects import Entity


class NoteRepository(Protocol):
    """Port for note persistence."""

    async def get_by_id(self, note_id: UUID) -> Note | None: ...

    async def list_all(self) -> list[Note]: ...

    async def list_except(self, note_id: UUID) -> list[Note]: ...

    async def create(self, note: Note) -> Note: ...

    async def update(self, note: Note) -> Note: ...

    async def delete(self, note_id: UUID) -> None: ...

    async def set_embedding(self, note_id: UUID, embedding: list[float]) -> None: ...

    async def set_tags(self, note_id: UUID, tags: list[str]) -> None: ...

    async def set_entities(self, note_id: UUID, entities: list[Entity]) -> None: ...
