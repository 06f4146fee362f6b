"""Chunking configuration DTO."""

from dataclasses import dataclass


@dataclass
class ChunkingConfig:
    """Configuration for text chunking, in approximate tokens."""

    target_tokens: int = 350
    overlap_tokens: int = 80
    max_chars_per_chunk: int = 4000
