"""Feature fusion: weighted link score, guardrail and classification.

score = 0.6*semantic + 0.2*entity + 0.15*tag + 0.05*(reference + temporal + session)
Halved when both semantic < 0.35 and entity < 0.20, then clamped to [0, 1].
hard if score >= 0.55, soft if 0.45 <= score < 0.55, otherwise none.
"""

import math
from collections.abc import Iterable, Mapping
from typing import Literal

from notelink.domain.scoring.entities import to_weighted_set
from notelink.domain.scoring.metrics import clamp01, weighted_jaccard
from notelink.domain.scoring.tags import TagNormalizer, tag_score
from notelink.domain.value_objects import Entity, FeatureScores, LinkDecision, StructuralSignals

SEMANTIC_WEIGHT = 0.6
ENTITY_WEIGHT = 0.2
TAG_WEIGHT = 0.15
STRUCTURAL_WEIGHT = 0.05

GUARDRAIL_SEMANTIC = 0.35
GUARDRAIL_ENTITY = 0.20
GUARDRAIL_FACTOR = 0.5

HARD_THRESHOLD = 0.55
SOFT_THRESHOLD = 0.45

Aggregate = Literal["mean", "max"]


def aggregate_semantic(top_cosines: Iterable[float] | None, method: Aggregate = "mean") -> float:
    """Mean or max of finite cosines, each clamped to [0, 1]."""
    vals = [clamp01(float(x)) for x in (top_cosines or ()) if math.isfinite(x)]
    if not vals:
        return 0.0
    if method == "max":
        return max(vals)
    return clamp01(sum(vals) / len(vals))


def compute_feature_scores(
    top_cosines: Iterable[float] | None,
    entities_a: Iterable[Entity] | None,
    entities_b: Iterable[Entity] | None,
    tags_a: Iterable[str] | None,
    tags_b: Iterable[str] | None,
    idf: Mapping[str, float] | None = None,
    structural: StructuralSignals | None = None,
    aggregate: Aggregate = "mean",
    tag_normalizer: TagNormalizer | None = None,
) -> FeatureScores:
    """Aggregate raw similarity signals into a bounded feature vector."""
    structural = structural or StructuralSignals()
    return FeatureScores(
        semantic=aggregate_semantic(top_cosines, aggregate),
        entity_score=weighted_jaccard(to_weighted_set(entities_a), to_weighted_set(entities_b)),
        tag_score=tag_score(tags_a, tags_b, idf, normalizer=tag_normalizer),
        reference_score=clamp01(structural.reference_score),
        temporal_score=clamp01(structural.temporal_score),
        session_score=clamp01(structural.session_score),
    )


def final_link_score(f: FeatureScores) -> float:
    """Fuse features into one score in [0, 1]."""
    score = (
        SEMANTIC_WEIGHT * f.semantic
        + ENTITY_WEIGHT * f.entity_score
        + TAG_WEIGHT * f.tag_score
        + STRUCTURAL_WEIGHT * (f.reference_score + f.temporal_score + f.session_score)
    )
    if f.semantic < GUARDRAIL_SEMANTIC and f.entity_score < GUARDRAIL_ENTITY:
        score *= GUARDRAIL_FACTOR
    return clamp01(score)


def classify_link(score: float) -> LinkDecision:
    if score >= HARD_THRESHOLD:
        return LinkDecision.HARD
    if score >= SOFT_THRESHOLD:
        return LinkDecision.SOFT
    return LinkDecision.NONE
