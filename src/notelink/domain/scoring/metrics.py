"""Vector and weighted-set similarity metrics.

Every function here is total: missing, empty or mismatched input yields 0,
never an exception.
"""

import math
from collections.abc import Mapping, Sequence

import numpy as np

# float rounding can leave v.v / |v|^2 a few ulps short of 1
UNIT_TOLERANCE = 1e-12


def clamp01(x: float) -> float:
    """Clamp to [0, 1]; NaN maps to 0."""
    if math.isnan(x):
        return 0.0
    return max(0.0, min(1.0, x))


def as_vector(values: Sequence[float] | None) -> np.ndarray | None:
    """Convert to a float64 array, or None when empty or not finite."""
    if values is None or len(values) == 0:
        return None
    arr = np.asarray(values, dtype=np.float64)
    if arr.ndim != 1 or not np.all(np.isfinite(arr)):
        return None
    return arr


def cosine_similarity(a: Sequence[float] | None, b: Sequence[float] | None) -> float:
    """Cosine similarity floored at 0 (similarity, not correlation)."""
    va = as_vector(a)
    vb = as_vector(b)
    if va is None or vb is None or va.shape != vb.shape:
        return 0.0
    norm_product = float(np.linalg.norm(va) * np.linalg.norm(vb))
    if norm_product <= 0:
        return 0.0
    sim = float(np.dot(va, vb)) / norm_product
    if abs(sim - 1.0) <= UNIT_TOLERANCE:
        return 1.0
    return clamp01(sim)


def weighted_jaccard(a: Mapping[str, float], b: Mapping[str, float]) -> float:
    """Sum of per-key minimum weights over sum of per-key maximum weights."""
    if not a and not b:
        return 0.0
    inter = 0.0
    union = 0.0
    for key in set(a) | set(b):
        wa = a.get(key, 0.0)
        wb = b.get(key, 0.0)
        inter += min(wa, wb)
        union += max(wa, wb)
    if union <= 0:
        return 0.0
    return inter / union
