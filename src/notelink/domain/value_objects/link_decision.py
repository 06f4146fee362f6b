"""Link decision for a scored note pair."""

from enum import StrEnum


class LinkDecision(StrEnum):
    """Three-way classification of a fused link score."""

    HARD = "hard"
    SOFT = "soft"
    NONE = "none"
