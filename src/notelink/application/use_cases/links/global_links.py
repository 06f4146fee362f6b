"""Global links use case - every directed note pair that should be linked."""

import asyncio
import logging

from notelink.application.dto.link_dto import LinkEdge
from notelink.application.services.link_scorer import LinkScorer, NoteProfile
from notelink.application.services.signal_resolver import SignalResolver
from notelink.domain.entities import Note
from notelink.domain.scoring import TagNormalizer, compute_tag_idf
from notelink.domain.scoring.fusion import Aggregate
from notelink.domain.value_objects import LinkDecision

logger = logging.getLogger(__name__)


class GlobalLinksUseCase:
    """Score every ordered pair (A, B), A != B, and keep hard and soft links."""

    def __init__(
        self,
        unit_of_work_factory: type,
        signal_resolver: SignalResolver,
        tag_normalizer: TagNormalizer | None = None,
        min_similarity: float = 0.7,
        top_k: int = 3,
        aggregate: Aggregate = "max",
        use_tag_idf: bool = False,
        resolve_concurrency: int = 4,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._signal_resolver = signal_resolver
        self._tag_normalizer = tag_normalizer or TagNormalizer()
        self._scorer = LinkScorer(
            min_similarity=min_similarity,
            top_k=top_k,
            aggregate=aggregate,
            tag_normalizer=self._tag_normalizer,
        )
        self._use_tag_idf = use_tag_idf
        self._resolve_concurrency = max(1, resolve_concurrency)

    async def execute(self) -> list[LinkEdge]:
        """Execute global link computation, strongest edges first."""
        async with self._uow_factory() as uow:
            notes = await uow.notes.list_all()
            chunks_by_note = await uow.chunks.get_by_note_ids([n.id for n in notes])
        if not notes:
            return []

        resolved = await self._resolve_all(notes)
        profiles = [NoteProfile.build(n, chunks_by_note.get(n.id, [])) for n in resolved]
        tag_idf = (
            compute_tag_idf([n.tags for n in resolved], self._tag_normalizer)
            if self._use_tag_idf
            else None
        )

        edges: list[LinkEdge] = []
        for source in profiles:
            for candidate in profiles:
                if candidate.note.id == source.note.id:
                    continue
                try:
                    suggestion = self._scorer.score(source, candidate, tag_idf)
                except Exception:
                    logger.warning(
                        "skipping pair %s -> %s",
                        source.note.id,
                        candidate.note.id,
                        exc_info=True,
                    )
                    continue
                if suggestion is None or suggestion.decision == LinkDecision.NONE:
                    continue
                edges.append(
                    LinkEdge(
                        source_id=source.note.id,
                        source_title=source.note.title or str(source.note.id),
                        target_id=candidate.note.id,
                        target_title=candidate.note.title or str(candidate.note.id),
                        score=suggestion.score,
                        decision=suggestion.decision,
                    )
                )

        edges.sort(key=lambda e: e.score, reverse=True)
        logger.info("global links: notes=%d edges=%d", len(notes), len(edges))
        return edges

    async def _resolve_all(self, notes: list[Note]) -> list[Note]:
        """Fill missing signals, a few notes at a time; a failing note keeps what it has."""
        semaphore = asyncio.Semaphore(self._resolve_concurrency)

        async def _resolve(note: Note) -> Note:
            async with semaphore:
                try:
                    return await self._signal_resolver.resolve(note)
                except Exception:
                    logger.warning("could not resolve signals for note %s", note.id, exc_info=True)
                    return note

        return list(await asyncio.gather(*(_resolve(n) for n in notes)))
