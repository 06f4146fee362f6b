"""Pairwise link scoring: cross-chunk matching, feature fusion and explain."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from notelink.application.dto.link_dto import LinkSuggestion
from notelink.application.services.structural_signals import StructuralSignalProvider
from notelink.domain.entities import Note, NoteChunk
from notelink.domain.scoring import (
    ChunkMatrix,
    TagNormalizer,
    build_explain,
    classify_link,
    compute_feature_scores,
    final_link_score,
    match_chunks,
)
from notelink.domain.scoring.fusion import Aggregate
from notelink.domain.scoring.matcher import DEFAULT_MIN_SIMILARITY, DEFAULT_TOP_K


@dataclass(frozen=True)
class NoteProfile:
    """A note with its chunk matrix prepared once for repeated comparison."""

    note: Note
    chunks: ChunkMatrix

    @classmethod
    def build(cls, note: Note, chunks: Sequence[NoteChunk]) -> "NoteProfile":
        return cls(note=note, chunks=ChunkMatrix.from_chunks(chunks))


class LinkScorer:
    """Scores one source note against one candidate note."""

    def __init__(
        self,
        min_similarity: float = DEFAULT_MIN_SIMILARITY,
        top_k: int = DEFAULT_TOP_K,
        aggregate: Aggregate = "max",
        tag_normalizer: TagNormalizer | None = None,
        structural: StructuralSignalProvider | None = None,
    ) -> None:
        self._min_similarity = min_similarity
        self._top_k = top_k
        self._aggregate = aggregate
        self._tag_normalizer = tag_normalizer or TagNormalizer()
        self._structural = structural or StructuralSignalProvider(self._tag_normalizer)

    def score(
        self,
        source: NoteProfile,
        candidate: NoteProfile,
        tag_idf: Mapping[str, float] | None = None,
    ) -> LinkSuggestion | None:
        """Score a pair; None when there is no semantic signal at all."""
        result = match_chunks(
            source.chunks,
            candidate.chunks,
            source_embedding=source.note.embedding,
            target_embedding=candidate.note.embedding,
            min_similarity=self._min_similarity,
            top_k=self._top_k,
        )
        if result.best_similarity <= 0:
            return None

        top_cosines = [m.similarity for m in result.matches] or [result.best_similarity]
        a, b = source.note, candidate.note
        features = compute_feature_scores(
            top_cosines,
            a.entities,
            b.entities,
            a.tags,
            b.tags,
            idf=tag_idf,
            structural=self._structural.compute(a, b),
            aggregate=self._aggregate,
            tag_normalizer=self._tag_normalizer,
        )
        score = final_link_score(features)
        return LinkSuggestion(
            candidate_id=b.id,
            title=b.title,
            score=score,
            decision=classify_link(score),
            explain=build_explain(
                top_cosines, a.entities, b.entities, a.tags, b.tags, self._tag_normalizer
            ),
            features=features,
            matches=result.matches,
        )
