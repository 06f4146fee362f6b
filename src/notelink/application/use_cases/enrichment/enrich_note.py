"""Enrich note use case - chunk embeddings, note embedding, tags, entities.

Each artifact is produced and committed by its own task in its own unit of
work, so a failed entity extraction never rolls back or blocks a finished
embedding for the same note.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from uuid import UUID, uuid4

from notelink.application.dto.chunking_config import ChunkingConfig
from notelink.application.ports import (
    Chunker,
    EmbeddingProvider,
    EntityExtractor,
    NoteEventPublisher,
    TagExtractor,
)
from notelink.application.services.note_text import build_note_text
from notelink.domain.entities import Note, NoteChunk
from notelink.domain.scoring import TagNormalizer, aggregate_entities

logger = logging.getLogger(__name__)

TASK_CHUNKS = "chunks"
TASK_EMBEDDING = "embedding"
TASK_TAGS = "tags"
TASK_ENTITIES = "entities"


@dataclass
class EnrichmentReport:
    """Per-task outcome of one enrichment run."""

    note_id: UUID
    succeeded: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "id": str(self.note_id),
            "succeeded": list(self.succeeded),
            "failed": dict(self.failed),
        }


class EnrichNoteUseCase:
    """Compute and store every derived artifact of a note, best effort."""

    def __init__(
        self,
        unit_of_work_factory: type,
        chunker: Chunker,
        embedding_provider: EmbeddingProvider,
        tag_extractor: TagExtractor,
        entity_extractor: EntityExtractor,
        event_publisher: NoteEventPublisher,
        chunking_config: ChunkingConfig | None = None,
        tag_normalizer: TagNormalizer | None = None,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._chunker = chunker
        self._embedding_provider = embedding_provider
        self._tag_extractor = tag_extractor
        self._entity_extractor = entity_extractor
        self._event_publisher = event_publisher
        self._chunking_config = chunking_config or ChunkingConfig()
        self._tag_normalizer = tag_normalizer or TagNormalizer()

    async def execute(self, note_id: UUID) -> EnrichmentReport | None:
        """Run all enrichment tasks for a note; None if the note is gone."""
        async with self._uow_factory() as uow:
            note = await uow.notes.get_by_id(note_id)
        if not note:
            logger.info("note %s no longer exists, skipping enrichment", note_id)
            return None

        tasks: dict[str, Callable[[Note], Awaitable[None]]] = {
            TASK_CHUNKS: self._embed_chunks,
            TASK_EMBEDDING: self._embed_note,
            TASK_TAGS: self._extract_tags,
            TASK_ENTITIES: self._extract_entities,
        }
        results = await asyncio.gather(
            *(task(note) for task in tasks.values()), return_exceptions=True
        )

        report = EnrichmentReport(note_id=note_id)
        for name, result in zip(tasks, results, strict=True):
            if isinstance(result, Exception):
                logger.warning("enrichment task %s failed for note %s: %s", name, note_id, result)
                report.failed[name] = str(result) or type(result).__name__
                self._event_publisher.publish(
                    note_id, "error", {"task": name, "message": report.failed[name]}
                )
            elif isinstance(result, BaseException):
                raise result
            else:
                report.succeeded.append(name)

        self._event_publisher.publish(note_id, "processed", report.to_dict())
        return report

    async def _embed_chunks(self, note: Note) -> None:
        pieces = self._chunker.chunk(note.content, self._chunking_config)
        vectors = await self._embedding_provider.embed([p.text for p in pieces]) if pieces else []
        chunks = [
            NoteChunk(
                id=uuid4(),
                note_id=note.id,
                order=piece.order,
                text=piece.text,
                embedding=vec,
            )
            for piece, vec in zip(pieces, vectors, strict=True)
        ]
        async with self._uow_factory() as uow:
            await uow.chunks.replace_for_note(note.id, chunks)
        logger.debug("stored %d chunks for note %s", len(chunks), note.id)

    async def _embed_note(self, note: Note) -> None:
        text = build_note_text(note.title, note.content)
        if not text:
            return
        vectors = await self._embedding_provider.embed([text])
        if not vectors:
            return
        async with self._uow_factory() as uow:
            await uow.notes.set_embedding(note.id, vectors[0])

    async def _extract_tags(self, note: Note) -> None:
        text = build_note_text(note.title, note.content)
        if not text:
            return
        tags = self._tag_normalizer.normalize(await self._tag_extractor.extract_tags(text))
        async with self._uow_factory() as uow:
            await uow.notes.set_tags(note.id, tags)

    async def _extract_entities(self, note: Note) -> None:
        text = build_note_text(note.title, note.content)
        if not text:
            return
        entities = aggregate_entities(await self._entity_extractor.extract_entities(text))
        async with self._uow_factory() as uow:
            await uow.notes.set_entities(note.id, entities)
