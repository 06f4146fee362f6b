"""Per-pair feature scores and structural signals."""

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class StructuralSignals:
    """Small structural boosts computed outside the scoring core."""

    reference_score: float = 0.0  # A mentions B's title (or the reverse)
    temporal_score: float = 0.0  # edited within 24h and share a tag or entity
    session_score: float = 0.0  # created in the same session


@dataclass(frozen=True)
class FeatureScores:
    """Bounded per-pair feature vector, every value in [0, 1]."""

    semantic: float = 0.0
    entity_score: float = 0.0
    tag_score: float = 0.0
    reference_score: float = 0.0
    temporal_score: float = 0.0
    session_score: float = 0.0

    def to_dict(self) -> dict[str, float]:
        return asdict(self)
