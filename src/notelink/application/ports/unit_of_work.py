"""Unit of Work port - transactional boundary."""

from collections.abc import AsyncIterator
from typing import Protocol

from notelink.application.ports.repositories.note_chunk_repository import (
    NoteChunkRepository,
)
from notelink.application.ports.repositories.note_repository import NoteRepository


class UnitOfWork(Protocol):
    """Unit of Work - manages transaction and repository access."""

    @property
    def notes(self) -> NoteRepository: ...

    @property
    def chunks(self) -> NoteChunkRepository: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


class UnitOfWorkFactory(Protocol):
    """Factory for creating UnitOfWork instances."""

    async def __call__(self) -> AsyncIterator[UnitOfWork]: ...
