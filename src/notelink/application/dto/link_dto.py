"""Link suggestion DTOs."""

from dataclasses import dataclass, field
from uuid import UUID

from notelink.domain.value_objects import ExplainRecord, FeatureScores, LinkDecision, Match


@dataclass
class FindLinksInput:
    """Input for ranking link candidates for one note."""

    note_id: UUID
    min_similarity: float = 0.7
    top_k: int = 3


@dataclass
class LinkSuggestion:
    """One scored candidate, with the evidence behind its score."""

    candidate_id: UUID
    title: str
    score: float
    decision: LinkDecision
    explain: ExplainRecord
    features: FeatureScores
    matches: list[Match] = field(default_factory=list)


@dataclass
class LinkEdge:
    """Directed link between two notes in the global link graph."""

    source_id: UUID
    source_title: str
    target_id: UUID
    target_title: str
    score: float
    decision: LinkDecision
