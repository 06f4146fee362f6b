"""Note DTOs."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from notelink.domain.entities import Note
from notelink.domain.value_objects import Entity


@dataclass
class NoteCreateInput:
    """Input for creating a note."""

    content: str
    title: str | None = None


@dataclass
class NoteUpdateInput:
    """Input for updating a note. None leaves the field unchanged."""

    note_id: UUID
    content: str | None = None
    title: str | None = None


@dataclass
class NoteOutput:
    """Output DTO for note."""

    id: UUID
    title: str
    content: str
    created_at: datetime
    updated_at: datetime
    tags: list[str] = field(default_factory=list)
    entities: list[Entity] = field(default_factory=list)
    has_embedding: bool = False

    @classmethod
    def from_note(cls, note: Note) -> "NoteOutput":
        return cls(
            id=note.id,
            title=note.title,
            content=note.content,
            created_at=note.created_at,
            updated_at=note.updated_at,
            tags=list(note.tags),
            entities=list(note.entities),
            has_embedding=bool(note.embedding),
        )


@dataclass
class NoteSearchInput:
    """Input for semantic note search."""

    query: str
    limit: int = 20


@dataclass
class NoteSearchResult:
    """One search hit: a note and its cosine similarity to the query."""

    id: UUID
    title: str
    created_at: datetime
    updated_at: datetime
    score: float
