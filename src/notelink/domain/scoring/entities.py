"""Entity name normalization and weighted entity sets."""

import math
import re
import unicodedata
from collections.abc import Iterable, Mapping

from notelink.domain.value_objects import Entity

_WS_OR_UNDERSCORE = re.compile(r"[_\s]+")
_NON_ENTITY_CHARS = re.compile(r"[^a-z0-9-]")
_HYPHEN_RUNS = re.compile(r"-{2,}")


def normalize_entity_name(name: str) -> str:
    """Lowercase, hyphenated canonical entity key ("New York_City" -> "new-york-city")."""
    s = unicodedata.normalize("NFKD", (name or "").lower().strip())
    s = "".join(ch for ch in s if not unicodedata.combining(ch))
    s = _WS_OR_UNDERSCORE.sub("-", s)
    s = _NON_ENTITY_CHARS.sub("-", s)
    s = _HYPHEN_RUNS.sub("-", s)
    return s.strip("-")


def _weight(value: float | None) -> float:
    try:
        w = float(value)
    except (TypeError, ValueError):
        return 1.0
    if not math.isfinite(w):
        return 1.0
    return max(0.0, w)


def to_weighted_set(entities: Iterable[Entity] | None) -> dict[str, float]:
    """Merge raw entities into canonical name -> accumulated weight."""
    out: dict[str, float] = {}
    for e in entities or ():
        key = normalize_entity_name(e.name)
        if not key:
            continue
        out[key] = out.get(key, 0.0) + _weight(e.weight)
    return out


def aggregate_entities(entities: Iterable[Entity] | None) -> list[Entity]:
    """Deduplicated entities with positive weight, heaviest first."""
    merged = to_weighted_set(entities)
    out = [Entity(name=k, weight=w) for k, w in merged.items() if w > 0]
    out.sort(key=lambda e: e.weight, reverse=True)
    return out


def top_shared_entities(
    a: Mapping[str, float], b: Mapping[str, float], limit: int = 5
) -> list[str]:
    """Shared keys ranked by min(weight_a, weight_b) desc, then key asc."""
    shared = []
    for key in set(a) & set(b):
        s = min(a[key], b[key])
        if s > 0:
            shared.append((key, s))
    shared.sort(key=lambda item: (-item[1], item[0]))
    return [key for key, _ in shared[:limit]]
