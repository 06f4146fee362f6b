"""Cross-chunk match evidence."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Match:
    """Best-evidence fragment pair between a source and a target note."""

    similarity: float
    source_chunk_order: int
    source_text: str
    target_chunk_order: int
    target_text: str


@dataclass(frozen=True)
class MatchResult:
    """Outcome of comparing two chunk sets.

    ``fallback`` is True when chunk vectors could not be compared and
    ``best_similarity`` comes from the note-level embeddings instead.
    """

    best_similarity: float
    matches: list[Match] = field(default_factory=list)
    fallback: bool = False
