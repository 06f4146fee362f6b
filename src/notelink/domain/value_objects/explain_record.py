"""Explanation of why two notes were scored the way they were."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ExplainRecord:
    """Compact, stable-sorted summary of the strongest shared evidence."""

    top_cosines: list[float] = field(default_factory=list)
    shared_entities: list[str] = field(default_factory=list)
    shared_tags: list[str] = field(default_factory=list)
