"""Tag normalization and tag-set similarity (Jaccard + binary BM25)."""

import math
import re
import unicodedata
from collections.abc import Iterable, Mapping

from notelink.domain.scoring.metrics import clamp01

MAX_TAGS = 10
MAX_TAG_WORDS = 3

# BM25 length normalization uses a fixed average tag count per note.
AVG_DOC_TAGS = 6.0

JACCARD_WEIGHT = 0.7
BM25_WEIGHT = 0.3
SQUASH_CONSTANT = 3.0

DEFAULT_TAG_SYNONYMS: dict[str, str] = {
    "js": "javascript",
    "ts": "typescript",
    "py": "python",
    "ml": "machine-learning",
    "llm": "large-language-models",
    "llms": "large-language-models",
    "k8s": "kubernetes",
    "postgres": "postgresql",
    "db": "database",
    "databases": "database",
}

DEFAULT_TAG_STOPLIST: frozenset[str] = frozenset(
    {
        "note",
        "notes",
        "misc",
        "general",
        "other",
        "todo",
        "idea",
        "ideas",
        "key-concepts",
        "note-title",
        "date",
        "untitled",
    }
)

_NON_TAG_CHARS = re.compile(r"[^a-z0-9-]+")
_HYPHEN_RUNS = re.compile(r"-{2,}")


def _strip_accents(s: str) -> str:
    decomposed = unicodedata.normalize("NFKD", s)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def normalize_tag(tag: str) -> str:
    """Canonical hyphenated form of one tag; empty string if nothing is left.

    Word-count, synonym and stop-list rules are applied by TagNormalizer.
    """
    s = _strip_accents((tag or "").lower())
    s = _NON_TAG_CHARS.sub(" ", s)
    s = "-".join(s.split())
    s = _HYPHEN_RUNS.sub("-", s)
    return s.strip("-")


class TagNormalizer:
    """Tag normalization pipeline with an injectable synonym table and stop-list."""

    def __init__(
        self,
        synonyms: Mapping[str, str] | None = None,
        stoplist: Iterable[str] | None = None,
        max_tags: int = MAX_TAGS,
    ) -> None:
        raw_synonyms = DEFAULT_TAG_SYNONYMS if synonyms is None else synonyms
        raw_stoplist = DEFAULT_TAG_STOPLIST if stoplist is None else stoplist
        self._synonyms: dict[str, str] = {}
        for variant, preferred in raw_synonyms.items():
            key = normalize_tag(variant)
            value = normalize_tag(preferred)
            if key and value:
                self._synonyms[key] = value
        self._stoplist = frozenset(t for t in (normalize_tag(s) for s in raw_stoplist) if t)
        self._max_tags = max_tags

    def normalize_one(self, tag: str) -> str | None:
        """Normalize a single tag; None when it is empty, too long or stop-listed."""
        if not isinstance(tag, str):
            return None
        s = normalize_tag(tag)
        if not s or s.count("-") + 1 > MAX_TAG_WORDS:
            return None
        s = self._synonyms.get(s, s)
        if s in self._stoplist:
            return None
        return s

    def normalize(self, tags: Iterable[str] | None) -> list[str]:
        """Normalize, dedupe (first seen wins) and cap a tag list."""
        seen: set[str] = set()
        out: list[str] = []
        for tag in tags or ():
            s = self.normalize_one(tag)
            if s is None or s in seen:
                continue
            seen.add(s)
            out.append(s)
            if len(out) >= self._max_tags:
                break
        return out


_default_normalizer = TagNormalizer()


def _tag_set(tags: Iterable[str] | None, normalizer: TagNormalizer | None) -> set[str]:
    return set((normalizer or _default_normalizer).normalize(tags))


def tag_jaccard(
    a: Iterable[str] | None,
    b: Iterable[str] | None,
    normalizer: TagNormalizer | None = None,
) -> float:
    """Plain Jaccard over normalized tag sets."""
    sa = _tag_set(a, normalizer)
    sb = _tag_set(b, normalizer)
    union = sa | sb
    if not union:
        return 0.0
    return len(sa & sb) / len(union)


def tag_bm25(
    query: Iterable[str] | None,
    doc: Iterable[str] | None,
    idf: Mapping[str, float] | None = None,
    k1: float = 1.2,
    b: float = 0.75,
    normalizer: TagNormalizer | None = None,
) -> float:
    """BM25 over binary tag presence. Unbounded; squash before mixing."""
    q = _tag_set(query, normalizer)
    d = _tag_set(doc, normalizer)
    if not q or not d:
        return 0.0
    length_norm = 1 - b + b * (len(d) / AVG_DOC_TAGS)
    term = (k1 + 1) / (1 + k1 * length_norm)  # tf is always 1
    idf = idf or {}
    return sum(idf.get(t, 1.0) * term for t in q & d)


def squash(x: float) -> float:
    """Map [0, inf) onto [0, 1)."""
    if x <= 0:
        return 0.0
    return x / (x + SQUASH_CONSTANT)


def tag_score(
    a: Iterable[str] | None,
    b: Iterable[str] | None,
    idf: Mapping[str, float] | None = None,
    normalizer: TagNormalizer | None = None,
) -> float:
    """Blend of tag Jaccard and squashed BM25, clamped to [0, 1]."""
    a = list(a or ())
    b = list(b or ())
    jaccard = tag_jaccard(a, b, normalizer)
    bm25 = tag_bm25(a, b, idf, normalizer=normalizer)
    return clamp01(JACCARD_WEIGHT * jaccard + BM25_WEIGHT * squash(bm25))


def tag_intersection(
    a: Iterable[str] | None,
    b: Iterable[str] | None,
    normalizer: TagNormalizer | None = None,
) -> list[str]:
    """Shared normalized tags, sorted."""
    return sorted(_tag_set(a, normalizer) & _tag_set(b, normalizer))


def compute_tag_idf(
    tag_sets: Iterable[Iterable[str]],
    normalizer: TagNormalizer | None = None,
) -> dict[str, float]:
    """BM25 inverse document frequency for every tag seen in a corpus."""
    doc_freq: dict[str, int] = {}
    total = 0
    for tags in tag_sets:
        total += 1
        for t in _tag_set(tags, normalizer):
            doc_freq[t] = doc_freq.get(t, 0) + 1
    return {
        t: math.log(1 + (total - df + 0.5) / (df + 0.5))
        for t, df in doc_freq.items()
    }
