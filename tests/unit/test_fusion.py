"""Unit tests for feature fusion, guardrail and classification."""

import math

import pytest

from notelink.domain.scoring import (
    aggregate_semantic,
    classify_link,
    compute_feature_scores,
    final_link_score,
)
from notelink.domain.value_objects import Entity, FeatureScores, LinkDecision, StructuralSignals


@pytest.mark.parametrize(
    ("score", "decision"),
    [
        (1.0, LinkDecision.HARD),
        (0.55, LinkDecision.HARD),
        (0.549999, LinkDecision.SOFT),
        (0.45, LinkDecision.SOFT),
        (0.449999, LinkDecision.NONE),
        (0.0, LinkDecision.NONE),
    ],
)
def test_classify_link_boundaries(score: float, decision: LinkDecision) -> None:
    assert classify_link(score) == decision


def test_aggregate_semantic() -> None:
    assert aggregate_semantic([0.9, 0.5]) == pytest.approx(0.7)
    assert aggregate_semantic([0.9, 0.5], "max") == pytest.approx(0.9)
    assert aggregate_semantic([1.5, -0.2, math.nan]) == pytest.approx(0.5)
    assert aggregate_semantic([]) == 0.0
    assert aggregate_semantic(None, "max") == 0.0


def test_zero_signal_scenario() -> None:
    features = compute_feature_scores([], [], [], [], [])
    assert features == FeatureScores()
    score = final_link_score(features)
    assert score == 0.0
    assert classify_link(score) == LinkDecision.NONE


def test_self_comparison_scenario() -> None:
    entities = [Entity("Python", 2.0), Entity("PostgreSQL", 1.0)]
    tags = ["python", "databases", "indexing"]
    features = compute_feature_scores([1.0], entities, entities, tags, tags)
    assert features.semantic == pytest.approx(1.0)
    assert features.entity_score == pytest.approx(1.0)
    # identical tag sets still blend in a squashed BM25 below 1
    assert features.tag_score == pytest.approx(0.8670886, abs=1e-6)
    score = final_link_score(features)
    assert score == pytest.approx(0.6 + 0.2 + 0.15 * 0.8670886, abs=1e-6)
    assert classify_link(score) == LinkDecision.HARD


def test_final_score_weights() -> None:
    f = FeatureScores(semantic=0.5, entity_score=0.5, tag_score=0.4, reference_score=1.0)
    assert final_link_score(f) == pytest.approx(0.3 + 0.1 + 0.06 + 0.05)


def test_all_signals_at_one_reaches_one() -> None:
    f = FeatureScores(1.0, 1.0, 1.0, 1.0, 1.0, 1.0)
    assert final_link_score(f) == 1.0


def test_guardrail_discontinuity() -> None:
    just_outside = FeatureScores(semantic=0.35, entity_score=0.0)
    just_inside = FeatureScores(semantic=0.349999, entity_score=0.0)
    assert final_link_score(just_outside) == pytest.approx(0.21)
    assert final_link_score(just_inside) == pytest.approx(0.5 * 0.6 * 0.349999)


def test_guardrail_not_applied_with_strong_entities() -> None:
    f = FeatureScores(semantic=0.1, entity_score=0.2)
    assert final_link_score(f) == pytest.approx(0.06 + 0.04)


def test_score_monotonic_in_semantic() -> None:
    previous = -1.0
    for semantic in (0.4, 0.5, 0.6, 0.8, 1.0):
        score = final_link_score(FeatureScores(semantic=semantic, entity_score=0.3, tag_score=0.2))
        assert score > previous
        previous = score


def test_score_monotonic_in_entity_score() -> None:
    previous = -1.0
    for entity in (0.0, 0.1, 0.3, 0.6, 1.0):
        score = final_link_score(FeatureScores(semantic=0.5, entity_score=entity, tag_score=0.2))
        assert score > previous
        previous = score


def test_score_monotonic_in_entity_score_across_guardrail_edge() -> None:
    # semantic stays below 0.35, so the halving lifts once entity reaches 0.20
    scores = [
        final_link_score(FeatureScores(semantic=0.2, entity_score=e, tag_score=0.2))
        for e in (0.0, 0.1, 0.19, 0.2, 0.5, 1.0)
    ]
    assert scores == sorted(scores)
    assert len(set(scores)) == len(scores)
    assert scores[2] == pytest.approx(0.5 * (0.12 + 0.038 + 0.03))
    assert scores[3] == pytest.approx(0.12 + 0.04 + 0.03)
    assert scores[3] - scores[2] > 0.09


@pytest.mark.parametrize(("semantic", "entity"), [(0.5, 0.3), (0.2, 0.1)])
def test_score_monotonic_in_tag_score(semantic: float, entity: float) -> None:
    previous = -1.0
    for tag in (0.0, 0.25, 0.5, 0.75, 1.0):
        score = final_link_score(
            FeatureScores(semantic=semantic, entity_score=entity, tag_score=tag)
        )
        assert score > previous
        previous = score


def test_structural_signals_are_clamped() -> None:
    features = compute_feature_scores(
        [0.8], [], [], [], [], structural=StructuralSignals(reference_score=3.0, temporal_score=-1.0)
    )
    assert features.reference_score == 1.0
    assert features.temporal_score == 0.0
