"""Explainability builder."""

from collections.abc import Iterable, Sequence

from notelink.domain.scoring.entities import to_weighted_set, top_shared_entities
from notelink.domain.scoring.tags import TagNormalizer, tag_intersection
from notelink.domain.value_objects import Entity, ExplainRecord


def build_explain(
    top_cosines: Sequence[float] | None,
    entities_a: Iterable[Entity] | None,
    entities_b: Iterable[Entity] | None,
    tags_a: Iterable[str] | None,
    tags_b: Iterable[str] | None,
    tag_normalizer: TagNormalizer | None = None,
) -> ExplainRecord:
    """Summarize why two notes scored as they did, without re-deriving the score."""
    return ExplainRecord(
        top_cosines=list(top_cosines or ())[:3],
        shared_entities=top_shared_entities(
            to_weighted_set(entities_a), to_weighted_set(entities_b), limit=5
        ),
        shared_tags=tag_intersection(tags_a, tags_b, tag_normalizer),
    )
