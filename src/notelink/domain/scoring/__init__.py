"""Pure note-pair scoring core: metrics, fusion, cross-chunk matching, explain."""

from notelink.domain.scoring.entities import (
    aggregate_entities,
    normalize_entity_name,
    to_weighted_set,
    top_shared_entities,
)
from notelink.domain.scoring.explain import build_explain
from notelink.domain.scoring.fusion import (
    aggregate_semantic,
    classify_link,
    compute_feature_scores,
    final_link_score,
)
from notelink.domain.scoring.matcher import ChunkMatrix, match_chunks, similarity_matrix
from notelink.domain.scoring.metrics import clamp01, cosine_similarity, weighted_jaccard
from notelink.domain.scoring.tags import (
    TagNormalizer,
    compute_tag_idf,
    normalize_tag,
    tag_bm25,
    tag_jaccard,
    tag_score,
)

__all__ = [
    "ChunkMatrix",
    "TagNormalizer",
    "aggregate_entities",
    "aggregate_semantic",
    "build_explain",
    "clamp01",
    "classify_link",
    "compute_feature_scores",
    "compute_tag_idf",
    "cosine_similarity",
    "final_link_score",
    "match_chunks",
    "normalize_entity_name",
    "normalize_tag",
    "similarity_matrix",
    "tag_bm25",
    "tag_jaccard",
    "tag_score",
    "to_weighted_set",
    "top_shared_entities",
    "weighted_jaccard",
]
