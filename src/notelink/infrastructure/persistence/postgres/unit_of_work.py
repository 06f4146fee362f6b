"""PostgreSQL Unit of Work: one pooled connection, one transaction."""

from collections.abc import AsyncIterator, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager

from psycopg import AsyncConnection
from psycopg_pool import AsyncConnectionPool

from notelink.infrastructure.persistence.postgres.note_chunk_repository import (
    PostgresNoteChunkRepository,
)
from notelink.infrastructure.persistence.postgres.note_repository import (
    PostgresNoteRepository,
)


class PostgresUnitOfWork:
    """Note and chunk repositories bound to a single connection."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn
        self.notes = PostgresNoteRepository(conn)
        self.chunks = PostgresNoteChunkRepository(conn)

    async def commit(self) -> None:
        await self._conn.commit()

    async def rollback(self) -> None:
        await self._conn.rollback()


def create_uow_factory(
    pool: AsyncConnectionPool,
) -> Callable[[], AbstractAsyncContextManager[PostgresUnitOfWork]]:
    """Factory of `async with` units of work; commit on success, rollback on error."""

    @asynccontextmanager
    async def factory() -> AsyncIterator[PostgresUnitOfWork]:
        async with pool.connection() as conn:
            uow = PostgresUnitOfWork(conn)
            try:
                yield uow
            except BaseException:
                await uow.rollback()
                raise
            await uow.commit()

    return factory
