"""PostgreSQL note chunk repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from notelink.domain.entities import NoteChunk
from notelink.infrastructure.persistence.blob_codec import decode_embedding, encode_embedding


def _row_to_chunk(r: tuple) -> NoteChunk:
    return NoteChunk(
        id=r[0],
        note_id=r[1],
        order=r[2],
        text=r[3],
        embedding=decode_embedding(r[4]),
    )


class PostgresNoteChunkRepository:
    """Note chunk repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def replace_for_note(self, note_id: UUID, chunks: list[NoteChunk]) -> list[NoteChunk]:
        """Drop the note's previous chunks and store the new set."""
        await self._conn.execute("DELETE FROM note_chunk WHERE note_id = %s", (note_id,))
        for c in chunks:
            await self._conn.execute(
                "INSERT INTO note_chunk (id, note_id, ord, text, embedding) "
                "VALUES (%s, %s, %s, %s, %s)",
                (c.id, note_id, c.order, c.text, encode_embedding(c.embedding)),
            )
        return chunks

    async def get_by_note_id(self, note_id: UUID) -> list[NoteChunk]:
        """Get chunks of a note in chunk order."""
        cur = await self._conn.execute(
            "SELECT id, note_id, ord, text, embedding FROM note_chunk "
            "WHERE note_id = %s ORDER BY ord",
            (note_id,),
        )
        return [_row_to_chunk(r) for r in await cur.fetchall()]

    async def get_by_note_ids(self, note_ids: list[UUID]) -> dict[UUID, list[NoteChunk]]:
        """Get chunks for many notes in one query, grouped by note."""
        out: dict[UUID, list[NoteChunk]] = {nid: [] for nid in note_ids}
        if not note_ids:
            return out
        cur = await self._conn.execute(
            "SELECT id, note_id, ord, text, embedding FROM note_chunk "
            "WHERE note_id = ANY(%s) ORDER BY note_id, ord",
            (list(note_ids),),
        )
        for r in await cur.fetchall():
            out.setdefault(r[1], []).append(_row_to_chunk(r))
        return out

    async def delete_by_note_id(self, note_id: UUID) -> None:
        """Delete all chunks for note."""
        await self._conn.execute("DELETE FROM note_chunk WHERE note_id = %s", (note_id,))
