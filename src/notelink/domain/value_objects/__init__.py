"""Domain value objects."""

from notelink.domain.value_objects.entity import Entity
from notelink.domain.value_objects.explain_record import ExplainRecord
from notelink.domain.value_objects.feature_scores import FeatureScores, StructuralSignals
from notelink.domain.value_objects.link_decision import LinkDecision
from notelink.domain.value_objects.match import Match, MatchResult
from notelink.domain.value_objects.text_chunk import TextChunk

__all__ = [
    "Entity",
    "ExplainRecord",
    "FeatureScores",
    "LinkDecision",
    "Match",
    "MatchResult",
    "StructuralSignals",
    "TextChunk",
]
