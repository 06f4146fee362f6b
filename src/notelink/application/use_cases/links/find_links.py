"""Find links use case - rank every other note as a link candidate."""

import logging

from notelink.application.dto.link_dto import FindLinksInput, LinkSuggestion
from notelink.application.services.link_scorer import LinkScorer, NoteProfile
from notelink.application.services.signal_resolver import SignalResolver
from notelink.application.services.structural_signals import StructuralSignalProvider
from notelink.domain.exceptions import NotFound
from notelink.domain.scoring import TagNormalizer, compute_tag_idf
from notelink.domain.scoring.fusion import Aggregate

logger = logging.getLogger(__name__)


class FindLinksUseCase:
    """Score one note against all others and return ranked suggestions."""

    def __init__(
        self,
        unit_of_work_factory: type,
        signal_resolver: SignalResolver,
        tag_normalizer: TagNormalizer | None = None,
        aggregate: Aggregate = "max",
        use_tag_idf: bool = False,
        max_results: int = 25,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._signal_resolver = signal_resolver
        self._tag_normalizer = tag_normalizer or TagNormalizer()
        self._aggregate = aggregate
        self._use_tag_idf = use_tag_idf
        self._max_results = max_results

    async def execute(self, input_data: FindLinksInput) -> list[LinkSuggestion]:
        """Execute link discovery for input_data.note_id."""
        async with self._uow_factory() as uow:
            target = await uow.notes.get_by_id(input_data.note_id)
            if not target:
                raise NotFound("Note", str(input_data.note_id))
            candidates = await uow.notes.list_except(target.id)
            chunks_by_note = await uow.chunks.get_by_note_ids(
                [target.id] + [c.id for c in candidates]
            )

        logger.info(
            "computing links for note %s (%r) min=%s topk=%s candidates=%d",
            target.id,
            target.title,
            input_data.min_similarity,
            input_data.top_k,
            len(candidates),
        )
        target = await self._signal_resolver.resolve(target)
        source = NoteProfile.build(target, chunks_by_note.get(target.id, []))

        tag_idf = None
        if self._use_tag_idf:
            tag_idf = compute_tag_idf(
                [target.tags] + [c.tags for c in candidates], self._tag_normalizer
            )

        scorer = LinkScorer(
            min_similarity=input_data.min_similarity,
            top_k=input_data.top_k,
            aggregate=self._aggregate,
            tag_normalizer=self._tag_normalizer,
            structural=StructuralSignalProvider(self._tag_normalizer),
        )
        suggestions: list[LinkSuggestion] = []
        for candidate in candidates:
            try:
                profile = NoteProfile.build(candidate, chunks_by_note.get(candidate.id, []))
                suggestion = scorer.score(source, profile, tag_idf)
            except Exception:
                logger.warning("skipping candidate %s", candidate.id, exc_info=True)
                continue
            if suggestion is None:
                continue
            logger.debug(
                "note %s -> %s score=%.3f decision=%s matches=%d",
                target.id,
                candidate.id,
                suggestion.score,
                suggestion.decision,
                len(suggestion.matches),
            )
            suggestions.append(suggestion)

        suggestions.sort(key=lambda s: s.score, reverse=True)
        top = suggestions[: self._max_results]
        logger.info("note %s scored=%d top=%d", target.id, len(suggestions), len(top))
        return top
