"""Unit tests for the Postgres repositories against a stub connection."""

from datetime import UTC, datetime
from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from notelink.domain.value_objects import Entity
from notelink.infrastructure.persistence.postgres.note_chunk_repository import (
    PostgresNoteChunkRepository,
)
from notelink.infrastructure.persistence.postgres.note_repository import PostgresNoteRepository
from notelink.infrastructure.persistence.postgres.unit_of_work import create_uow_factory

from tests.conftest import make_chunk, make_note


def _conn(rows=None, row=None):
    cursor = MagicMock()
    cursor.fetchall = AsyncMock(return_value=rows or [])
    cursor.fetchone = AsyncMock(return_value=row)
    conn = MagicMock()
    conn.execute = AsyncMock(return_value=cursor)
    return conn


class TestPostgresNoteRepository:
    @pytest.mark.asyncio
    async def test_get_by_id_decodes_blobs(self) -> None:
        nid = uuid4()
        now = datetime.now(UTC)
        row = (nid, "t", "c", "[1, 2]", '["python"]', '[{"entity": "Go", "weight": 2}]', now, now)
        repo = PostgresNoteRepository(_conn(row=row))
        note = await repo.get_by_id(nid)
        assert note.embedding == [1.0, 2.0]
        assert note.tags == ["python"]
        assert note.entities == [Entity("Go", 2.0)]

    @pytest.mark.asyncio
    async def test_get_by_id_tolerates_malformed_blobs(self) -> None:
        now = datetime.now(UTC)
        row = (uuid4(), "t", "c", "{broken", None, "42", now, now)
        note = await PostgresNoteRepository(_conn(row=row)).get_by_id(row[0])
        assert note.embedding is None
        assert note.tags == []
        assert note.entities == []

    @pytest.mark.asyncio
    async def test_get_by_id_missing(self) -> None:
        assert await PostgresNoteRepository(_conn(row=None)).get_by_id(uuid4()) is None

    @pytest.mark.asyncio
    async def test_create_encodes_blobs(self) -> None:
        conn = _conn()
        note = make_note("c", title="t", embedding=[0.5], tags=["db"], entities=[Entity("X")])
        await PostgresNoteRepository(conn).create(note)
        sql, params = conn.execute.await_args.args
        assert sql.startswith("INSERT INTO note")
        assert params[3:6] == ("[0.5]", '["db"]', '[{"entity": "X", "weight": 1.0}]')

    @pytest.mark.asyncio
    async def test_list_except_passes_id(self) -> None:
        conn = _conn(rows=[])
        nid = uuid4()
        assert await PostgresNoteRepository(conn).list_except(nid) == []
        sql, params = conn.execute.await_args.args
        assert "id <> %s" in sql
        assert params == (nid,)


class TestPostgresNoteChunkRepository:
    @pytest.mark.asyncio
    async def test_get_by_note_ids_groups_rows(self) -> None:
        a, b, empty = uuid4(), uuid4(), uuid4()
        rows = [
            (uuid4(), a, 0, "a0", "[1]"),
            (uuid4(), a, 1, "a1", "oops"),
            (uuid4(), b, 0, "b0", None),
        ]
        conn = _conn(rows=rows)
        grouped = await PostgresNoteChunkRepository(conn).get_by_note_ids([a, b, empty])
        assert [c.text for c in grouped[a]] == ["a0", "a1"]
        assert grouped[a][0].embedding == [1.0]
        assert grouped[a][1].embedding is None
        assert [c.order for c in grouped[b]] == [0]
        assert grouped[empty] == []
        assert "ANY(%s)" in conn.execute.await_args.args[0]

    @pytest.mark.asyncio
    async def test_get_by_note_ids_empty_skips_query(self) -> None:
        conn = _conn()
        assert await PostgresNoteChunkRepository(conn).get_by_note_ids([]) == {}
        conn.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_replace_for_note_deletes_then_inserts(self) -> None:
        conn = _conn()
        nid = uuid4()
        chunks = [make_chunk(nid, 0, "x", [0.1]), make_chunk(nid, 1, "y", None)]
        await PostgresNoteChunkRepository(conn).replace_for_note(nid, chunks)
        statements = [call.args[0] for call in conn.execute.await_args_list]
        assert statements[0].startswith("DELETE FROM note_chunk")
        assert sum(s.startswith("INSERT INTO note_chunk") for s in statements) == 2
        assert conn.execute.await_args_list[2].args[1][4] is None


class TestUnitOfWorkFactory:
    @staticmethod
    def _pool(conn):
        @asynccontextmanager
        async def connection():
            yield conn

        pool = MagicMock()
        pool.connection = connection
        return pool

    @pytest.mark.asyncio
    async def test_commits_on_success(self) -> None:
        conn = _conn()
        conn.commit = AsyncMock()
        conn.rollback = AsyncMock()
        factory = create_uow_factory(self._pool(conn))
        async with factory() as uow:
            await uow.notes.delete(uuid4())
        conn.commit.assert_awaited_once()
        conn.rollback.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_rolls_back_on_error(self) -> None:
        conn = _conn()
        conn.commit = AsyncMock()
        conn.rollback = AsyncMock()
        factory = create_uow_factory(self._pool(conn))
        with pytest.raises(RuntimeError):
            async with factory():
                raise RuntimeError("boom")
        conn.rollback.assert_awaited_once()
        conn.commit.assert_not_awaited()
