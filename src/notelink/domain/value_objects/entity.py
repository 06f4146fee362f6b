"""Weighted named entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Entity:
    """Named entity or key concept with an importance weight (>= 0)."""

    name: str
    weight: float = 1.0
