"""Cross-chunk matcher.

Compares every chunk vector of one note with every chunk vector of another,
keeps the best cosine as the note-level semantic signal and returns the top-k
fragment pairs above a minimum similarity as evidence.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

import numpy as np

from notelink.domain.scoring.metrics import UNIT_TOLERANCE, as_vector, cosine_similarity
from notelink.domain.value_objects import Match, MatchResult

DEFAULT_MIN_SIMILARITY = 0.7
DEFAULT_TOP_K = 3
MATCH_TEXT_LIMIT = 160


class EmbeddedChunk(Protocol):
    """Anything with an order, a text and an optional embedding."""

    order: int
    text: str
    embedding: Sequence[float] | None


def truncate_text(text: str, limit: int = MATCH_TEXT_LIMIT) -> str:
    """Whitespace-collapse and cut for display."""
    return " ".join((text or "").split())[:limit]


@dataclass(frozen=True)
class ChunkMatrix:
    """One note's chunk vectors, unit-normalized once for reuse across candidates.

    ``dimension`` is the length of the first non-empty chunk vector; rows with
    any other length are left out. Zero-norm rows stay all-zero.
    """

    dimension: int
    orders: tuple[int, ...]
    texts: tuple[str, ...]
    unit_vectors: np.ndarray

    @classmethod
    def from_chunks(cls, chunks: Sequence[EmbeddedChunk]) -> "ChunkMatrix":
        dimension = 0
        for ch in chunks:
            if ch.embedding:
                dimension = len(ch.embedding)
                break
        orders: list[int] = []
        texts: list[str] = []
        rows: list[np.ndarray] = []
        if dimension:
            for ch in chunks:
                vec = as_vector(ch.embedding)
                if vec is None or vec.shape[0] != dimension:
                    continue
                norm = np.linalg.norm(vec)
                rows.append(vec / norm if norm > 0 else vec)
                orders.append(ch.order)
                texts.append(ch.text)
        matrix = np.vstack(rows) if rows else np.zeros((0, dimension), dtype=np.float64)
        return cls(
            dimension=dimension,
            orders=tuple(orders),
            texts=tuple(texts),
            unit_vectors=matrix,
        )

    def __len__(self) -> int:
        return len(self.orders)

    def compatible_with(self, other: "ChunkMatrix") -> bool:
        return (
            self.dimension > 0
            and self.dimension == other.dimension
            and len(self) > 0
            and len(other) > 0
        )


def similarity_matrix(source: ChunkMatrix, target: ChunkMatrix) -> np.ndarray:
    """Clamped cosine matrix, rows = source chunks, cols = target chunks."""
    if not source.compatible_with(target):
        return np.zeros((len(source), len(target)), dtype=np.float64)
    sims = np.clip(source.unit_vectors @ target.unit_vectors.T, 0.0, 1.0)
    sims[sims >= 1.0 - UNIT_TOLERANCE] = 1.0
    return sims


def match_chunks(
    source: ChunkMatrix | Sequence[EmbeddedChunk],
    target: ChunkMatrix | Sequence[EmbeddedChunk],
    source_embedding: Sequence[float] | None = None,
    target_embedding: Sequence[float] | None = None,
    min_similarity: float = DEFAULT_MIN_SIMILARITY,
    top_k: int = DEFAULT_TOP_K,
) -> MatchResult:
    """Find the best similarity and top-k evidence pairs between two notes.

    Falls back to the note-level embeddings, with no matches, when the chunk
    sets share no dimension or either side has no usable vectors.
    """
    if not isinstance(source, ChunkMatrix):
        source = ChunkMatrix.from_chunks(source)
    if not isinstance(target, ChunkMatrix):
        target = ChunkMatrix.from_chunks(target)

    if not source.compatible_with(target):
        return MatchResult(
            best_similarity=cosine_similarity(source_embedding, target_embedding),
            matches=[],
            fallback=True,
        )

    sims = similarity_matrix(source, target)
    best = float(sims.max()) if sims.size else 0.0

    # argwhere walks row-major, so candidates come out in A-then-B order
    candidates = [
        Match(
            similarity=float(sims[i, j]),
            source_chunk_order=source.orders[i],
            source_text=truncate_text(source.texts[i]),
            target_chunk_order=target.orders[j],
            target_text=truncate_text(target.texts[j]),
        )
        for i, j in np.argwhere(sims >= min_similarity)
    ]
    candidates.sort(key=lambda m: m.similarity, reverse=True)
    return MatchResult(
        best_similarity=max(0.0, best),
        matches=candidates[: max(0, top_k)],
        fallback=False,
    )
