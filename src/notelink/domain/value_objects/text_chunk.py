"""Text chunk produced by a chunker."""

from dataclasses import dataclass


@dataclass(frozen=True)
class TextChunk:
    """Contiguous slice [start_offset, end_offset) of whitespace-normalized text."""

    order: int
    text: str
    start_offset: int
    end_offset: int
