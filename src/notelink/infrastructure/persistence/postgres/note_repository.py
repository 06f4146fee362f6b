"""PostgreSQL note repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from notelink.domain.entities import Note
from notelink.domain.value_objects import Entity
from notelink.infrastructure.persistence.blob_codec import (
    decode_embedding,
    decode_entities,
    decode_tags,
    encode_embedding,
    encode_entities,
    encode_tags,
)

_COLUMNS = "id, title, content, embedding, tags, entities, created_at, updated_at"


def _row_to_note(r: tuple) -> Note:
    return Note(
        id=r[0],
        title=r[1],
        content=r[2],
        embedding=decode_embedding(r[3]),
        tags=decode_tags(r[4]),
        entities=decode_entities(r[5]),
        created_at=r[6],
        updated_at=r[7],
    )


class PostgresNoteRepository:
    """Note repository; embeddings, tags and entities are JSON text columns."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, note_id: UUID) -> Note | None:
        """Get note by id."""
        cur = await self._conn.execute(f"SELECT {_COLUMNS} FROM note WHERE id = %s", (note_id,))
        r = await cur.fetchone()
        return _row_to_note(r) if r else None

    async def list_all(self) -> list[Note]:
        """List all notes, oldest first."""
        cur = await self._conn.execute(f"SELECT {_COLUMNS} FROM note ORDER BY created_at, id")
        return [_row_to_note(r) for r in await cur.fetchall()]

    async def list_except(self, note_id: UUID) -> list[Note]:
        """List every note other than note_id, oldest first."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM note WHERE id <> %s ORDER BY created_at, id",
            (note_id,),
        )
        return [_row_to_note(r) for r in await cur.fetchall()]

    async def create(self, note: Note) -> Note:
        """Create note."""
        await self._conn.execute(
            f"INSERT INTO note ({_COLUMNS}) VALUES (%s, %s, %s, %s, %s, %s, %s, %s)",
            (
                note.id,
                note.title,
                note.content,
                encode_embedding(note.embedding),
                encode_tags(note.tags),
                encode_entities(note.entities),
                note.created_at,
                note.updated_at,
            ),
        )
        return note

    async def update(self, note: Note) -> Note:
        """Update title and content."""
        await self._conn.execute(
            "UPDATE note SET title=%s, content=%s, updated_at=%s WHERE id=%s",
            (note.title, note.content, note.updated_at, note.id),
        )
        return note

    async def delete(self, note_id: UUID) -> None:
        await self._conn.execute("DELETE FROM note WHERE id = %s", (note_id,))

    async def set_embedding(self, note_id: UUID, embedding: list[float]) -> None:
        await self._conn.execute(
            "UPDATE note SET embedding=%s WHERE id=%s",
            (encode_embedding(embedding), note_id),
        )

    async def set_tags(self, note_id: UUID, tags: list[str]) -> None:
        await self._conn.execute(
            "UPDATE note SET tags=%s WHERE id=%s", (encode_tags(tags), note_id)
        )

    async def set_entities(self, note_id: UUID, entities: list[Entity]) -> None:
        await self._conn.execute(
            "UPDATE note SET entities=%s WHERE id=%s",
            (encode_entities(entities), note_id),
        )
