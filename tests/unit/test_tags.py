"""Unit tests for tag normalization and tag-set similarity."""

import math

import pytest

from notelink.domain.scoring.tags import (
    TagNormalizer,
    compute_tag_idf,
    normalize_tag,
    squash,
    tag_bm25,
    tag_intersection,
    tag_jaccard,
    tag_score,
)


def test_normalize_tag_canonical_form() -> None:
    assert normalize_tag("  Machine   Learning ") == "machine-learning"
    assert normalize_tag("C++ / Rust!") == "c-rust"
    assert normalize_tag("Café Crème") == "cafe-creme"
    assert normalize_tag("--a--b--") == "a-b"
    assert normalize_tag("???") == ""


def test_normalizer_applies_synonyms_and_stoplist() -> None:
    normalizer = TagNormalizer()
    assert normalizer.normalize(["JS", "k8s", "Postgres", "Notes", "TODO"]) == [
        "javascript",
        "kubernetes",
        "postgresql",
    ]


def test_normalizer_drops_long_tags_and_dedupes() -> None:
    normalizer = TagNormalizer()
    tags = ["one two three four", "Python", "python", "PY", "", 42]
    assert normalizer.normalize(tags) == ["python"]


def test_normalizer_caps_tag_count() -> None:
    tags = [f"topic{i}" for i in range(15)]
    out = TagNormalizer().normalize(tags)
    assert out == [f"topic{i}" for i in range(10)]


def test_normalizer_is_idempotent() -> None:
    normalizer = TagNormalizer()
    raw = ["ML", "Deep   Learning", "llms", "misc", "Vector DB", "ts", "Kubernetes"]
    once = normalizer.normalize(raw)
    assert normalizer.normalize(once) == once


def test_normalizer_with_custom_tables() -> None:
    normalizer = TagNormalizer(synonyms={"Golang": "Go"}, stoplist=["go-lang-misc"])
    assert normalizer.normalize(["golang", "notes", "go lang misc"]) == ["go", "notes"]


def test_tag_jaccard() -> None:
    assert tag_jaccard(["python", "ml"], ["Python", "Machine Learning", "rust"]) == pytest.approx(
        2 / 3
    )
    assert tag_jaccard([], []) == 0.0


def test_tag_bm25_values() -> None:
    # |d| = 3: length_norm = 0.25 + 0.75 * 3/6 = 0.625 ; term = 2.2 / 1.75
    assert tag_bm25(["a", "b", "c"], ["a", "b", "c"]) == pytest.approx(3 * 2.2 / 1.75)
    # |d| = 1: length_norm = 0.375 ; term = 2.2 / 1.45
    assert tag_bm25(["a"], ["a"]) == pytest.approx(2.2 / 1.45)
    assert tag_bm25(["a"], ["b"]) == 0.0
    assert tag_bm25([], ["a"]) == 0.0


def test_tag_bm25_uses_idf() -> None:
    plain = tag_bm25(["a"], ["a"])
    assert tag_bm25(["a"], ["a"], idf={"a": 2.0}) == pytest.approx(2 * plain)


def test_squash() -> None:
    assert squash(0.0) == 0.0
    assert squash(-1.0) == 0.0
    assert squash(3.0) == pytest.approx(0.5)
    assert squash(1e9) < 1.0


def test_tag_score_identical_sets() -> None:
    bm25 = 3 * 2.2 / 1.75
    expected = 0.7 * 1.0 + 0.3 * bm25 / (bm25 + 3)
    assert tag_score(["a", "b", "c"], ["a", "b", "c"]) == pytest.approx(expected)
    assert tag_score(["a", "b", "c"], ["a", "b", "c"]) == pytest.approx(0.8670886, abs=1e-6)


def test_tag_score_disjoint_and_empty() -> None:
    assert tag_score(["a"], ["b"]) == 0.0
    assert tag_score(None, None) == 0.0


def test_tag_intersection_sorted_and_normalized() -> None:
    assert tag_intersection(["Zeta", "alpha", "JS"], ["javascript", "zeta", "ALPHA"]) == [
        "alpha",
        "javascript",
        "zeta",
    ]


def test_compute_tag_idf() -> None:
    idf = compute_tag_idf([["python", "rust"], ["python"], ["go"]])
    assert idf["python"] == pytest.approx(math.log(1 + (3 - 2 + 0.5) / (2 + 0.5)))
    assert idf["rust"] == pytest.approx(math.log(1 + (3 - 1 + 0.5) / (1 + 0.5)))
    assert idf["rust"] > idf["python"]
