"""JSON text blob codec for embeddings, tags and entities.

Decoders never raise: malformed or missing blobs decode to "absent"
(None for embeddings, empty lists otherwise).
"""

import json
import math
from typing import Any

from notelink.domain.value_objects import Entity


def _safe_loads(raw: str | bytes | None) -> Any:
    if not raw:
        return None
    try:
        return json.loads(raw)
    except (TypeError, ValueError):
        return None


def _is_number(x: Any) -> bool:
    return isinstance(x, (int, float)) and not isinstance(x, bool) and math.isfinite(x)


def decode_embedding(raw: str | bytes | None) -> list[float] | None:
    """number[] -> list of floats; non-numeric items are dropped."""
    value = _safe_loads(raw)
    if not isinstance(value, list):
        return None
    return [float(x) for x in value if _is_number(x)]


def decode_tags(raw: str | bytes | None) -> list[str]:
    value = _safe_loads(raw)
    if not isinstance(value, list):
        return []
    return [x for x in value if isinstance(x, str)]


def decode_entities(raw: str | bytes | None) -> list[Entity]:
    """{entity, weight}[] -> entities; "name" is accepted for "entity"."""
    value = _safe_loads(raw)
    if not isinstance(value, list):
        return []
    out: list[Entity] = []
    for item in value:
        if not isinstance(item, dict):
            continue
        name = item.get("entity")
        if not isinstance(name, str):
            name = item.get("name")
        if not isinstance(name, str) or not name:
            continue
        weight = item.get("weight")
        out.append(Entity(name=name, weight=float(weight) if _is_number(weight) else 1.0))
    return out


def encode_embedding(embedding: list[float] | None) -> str | None:
    if embedding is None:
        return None
    return json.dumps([float(x) for x in embedding])


def encode_tags(tags: list[str]) -> str:
    return json.dumps(list(tags), ensure_ascii=False)


def encode_entities(entities: list[Entity]) -> str:
    return json.dumps(
        [{"entity": e.name, "weight": e.weight} for e in entities], ensure_ascii=False
    )
