"""Pytest fixtures for NoteLink tests."""

from __future__ import annotations

from contextlib import asynccontextmanager
from dataclasses import replace
from datetime import UTC, datetime
from typing import Any
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

import pytest

from notelink.application.dto.chunking_config import ChunkingConfig
from notelink.domain.entities import Note, NoteChunk
from notelink.domain.value_objects import Entity

# Keyword vocabulary for the fake embedding: one dimension per topic.
VOCAB = ("postgres", "python", "kubernetes", "cooking")


def keyword_embedding(text: str) -> list[float]:
    """Deterministic bag-of-keywords vector; all zeros for off-vocabulary text."""
    lowered = text.lower()
    return [float(lowered.count(word)) for word in VOCAB]


def make_note(
    content: str,
    title: str | None = None,
    embedding: list[float] | None = None,
    tags: list[str] | None = None,
    entities: list[Entity] | None = None,
    updated_at: datetime | None = None,
) -> Note:
    now = updated_at or datetime.now(UTC)
    return Note(
        id=uuid4(),
        title=title if title is not None else content.split(".")[0],
        content=content,
        created_at=now,
        updated_at=now,
        embedding=embedding,
        tags=list(tags or []),
        entities=list(entities or []),
    )


def make_chunk(note_id: UUID, order: int, text: str, embedding: list[float] | None) -> NoteChunk:
    return NoteChunk(id=uuid4(), note_id=note_id, order=order, text=text, embedding=embedding)


# --- Fake repositories ---


class FakeNoteRepository:
    """In-memory note repository."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, Note] = {}

    async def get_by_id(self, note_id: UUID) -> Note | None:
        return self._by_id.get(note_id)

    async def list_all(self) -> list[Note]:
        return sorted(self._by_id.values(), key=lambda n: (n.created_at, str(n.id)))

    async def list_except(self, note_id: UUID) -> list[Note]:
        return [n for n in await self.list_all() if n.id != note_id]

    async def create(self, note: Note) -> Note:
        self._by_id[note.id] = note
        return note

    async def update(self, note: Note) -> Note:
        current = self._by_id[note.id]
        self._by_id[note.id] = replace(
            current, title=note.title, content=note.content, updated_at=note.updated_at
        )
        return note

    async def delete(self, note_id: UUID) -> None:
        self._by_id.pop(note_id, None)

    async def set_embedding(self, note_id: UUID, embedding: list[float]) -> None:
        if note_id in self._by_id:
            self._by_id[note_id] = replace(self._by_id[note_id], embedding=list(embedding))

    async def set_tags(self, note_id: UUID, tags: list[str]) -> None:
        if note_id in self._by_id:
            self._by_id[note_id] = replace(self._by_id[note_id], tags=list(tags))

    async def set_entities(self, note_id: UUID, entities: list[Entity]) -> None:
        if note_id in self._by_id:
            self._by_id[note_id] = replace(self._by_id[note_id], entities=list(entities))


class FakeNoteChunkRepository:
    """In-memory note chunk repository."""

    def __init__(self) -> None:
        self._by_note: dict[UUID, list[NoteChunk]] = {}

    async def replace_for_note(self, note_id: UUID, chunks: list[NoteChunk]) -> list[NoteChunk]:
        self._by_note[note_id] = sorted(chunks, key=lambda c: c.order)
        return chunks

    async def get_by_note_id(self, note_id: UUID) -> list[NoteChunk]:
        return list(self._by_note.get(note_id, []))

    async def get_by_note_ids(self, note_ids: list[UUID]) -> dict[UUID, list[NoteChunk]]:
        return {nid: list(self._by_note.get(nid, [])) for nid in note_ids}

    async def delete_by_note_id(self, note_id: UUID) -> None:
        self._by_note.pop(note_id, None)


# --- Fake UnitOfWork ---


class FakeUnitOfWork:
    """In-memory Unit of Work with fake repositories."""

    def __init__(self) -> None:
        self.notes = FakeNoteRepository()
        self.chunks = FakeNoteChunkRepository()
        self.commits = 0

    async def commit(self) -> None:
        self.commits += 1

    async def rollback(self) -> None:
        pass

    def add(self, note: Note, chunks: list[NoteChunk] | None = None) -> Note:
        """Seed a note (and its chunks) without going through a use case."""
        self.notes._by_id[note.id] = note
        if chunks is not None:
            self.chunks._by_note[note.id] = list(chunks)
        return note


class RecordingEventPublisher:
    """NoteEventPublisher that keeps every published event."""

    def __init__(self) -> None:
        self.events: list[tuple[UUID, str, dict[str, Any]]] = []

    def publish(self, note_id: UUID, event: str, data: dict[str, Any]) -> None:
        self.events.append((note_id, event, data))

    def names(self, note_id: UUID) -> list[str]:
        return [e for nid, e, _ in self.events if nid == note_id]


class RecordingScheduler:
    """EnrichmentScheduler that only records scheduled note ids."""

    def __init__(self) -> None:
        self.scheduled: list[UUID] = []

    def schedule(self, note_id: UUID) -> None:
        self.scheduled.append(note_id)


# --- Fixtures ---


@pytest.fixture
def fake_uow() -> FakeUnitOfWork:
    """Fresh in-memory UnitOfWork for each test."""
    return FakeUnitOfWork()


@pytest.fixture
def uow_factory(fake_uow: FakeUnitOfWork):
    """Factory returning async context manager that yields the test's shared UoW."""

    @asynccontextmanager
    async def _factory():
        yield fake_uow
        await fake_uow.commit()

    return _factory


@pytest.fixture
def mock_embedding_provider():
    """AsyncMock for EmbeddingProvider - keyword vectors per text."""

    async def _embed(texts: list[str]) -> list[list[float]]:
        return [keyword_embedding(t) for t in texts]

    mock = AsyncMock()
    mock.embed = AsyncMock(side_effect=_embed)
    return mock


@pytest.fixture
def mock_tag_extractor():
    """AsyncMock for TagExtractor - vocabulary words present in the text, plus noise."""

    async def _extract(text: str) -> list[str]:
        lowered = text.lower()
        return [w.upper() for w in VOCAB if w in lowered] + ["Notes"]

    mock = AsyncMock()
    mock.extract_tags = AsyncMock(side_effect=_extract)
    return mock


@pytest.fixture
def mock_entity_extractor():
    """AsyncMock for EntityExtractor - returns no entities by default."""
    mock = AsyncMock()
    mock.extract_entities = AsyncMock(return_value=[])
    return mock


@pytest.fixture
def event_publisher() -> RecordingEventPublisher:
    return RecordingEventPublisher()


@pytest.fixture
def scheduler() -> RecordingScheduler:
    return RecordingScheduler()


@pytest.fixture
def chunking_config() -> ChunkingConfig:
    """Default chunking config for SentenceChunker tests."""
    return ChunkingConfig(target_tokens=350, overlap_tokens=80, max_chars_per_chunk=4000)
