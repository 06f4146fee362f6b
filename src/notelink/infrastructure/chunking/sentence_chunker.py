"""Sentence-boundary text chunker implementation."""

import math

from notelink.application.dto.chunking_config import ChunkingConfig
from notelink.domain.value_objects import TextChunk

# Rough tokens -> chars conversion factor
CHARS_PER_TOKEN = 4

MIN_TARGET_TOKENS = 50
MIN_MAX_CHARS = 500
BOUNDARY_FLOOR = 0.6
MAX_OVERLAP_RATIO = 0.8


def approx_token_count(text: str) -> int:
    """Approximate token count using the chars-per-token heuristic."""
    if not text:
        return 0
    return math.ceil(len(text) / CHARS_PER_TOKEN)


class SentenceChunker:
    """Chunker that prefers sentence ends, then word boundaries, then hard cuts."""

    def chunk(self, text: str, config: ChunkingConfig | None = None) -> list[TextChunk]:
        """Split text into overlapping chunks of roughly target_tokens each."""
        config = config or ChunkingConfig()
        target_tokens = max(MIN_TARGET_TOKENS, int(config.target_tokens))
        overlap_tokens = max(0, int(config.overlap_tokens))
        max_chars = max(MIN_MAX_CHARS, int(config.max_chars_per_chunk))

        target_chars = min(target_tokens * CHARS_PER_TOKEN, max_chars)
        overlap_chars = min(
            overlap_tokens * CHARS_PER_TOKEN, math.floor(target_chars * MAX_OVERLAP_RATIO)
        )
        floor_chars = math.floor(target_chars * BOUNDARY_FLOOR)

        text = " ".join((text or "").split())
        if not text:
            return []

        chunks: list[TextChunk] = []
        start = 0
        while start < len(text):
            end = min(len(text), start + target_chars)

            if end < len(text):
                period = text.rfind(". ", 0, end + 2)
                newline = text.rfind("\n", 0, end + 1)
                boundary = max(period, newline)
                if boundary > start + floor_chars:
                    end = boundary + 1  # keep the terminal character
                else:
                    space = text.rfind(" ", 0, end + 1)
                    if space > start + floor_chars:
                        end = space

            raw = text[start:end]
            stripped = raw.strip()
            if stripped:
                lead = len(raw) - len(raw.lstrip())
                chunk_start = start + lead
                chunks.append(
                    TextChunk(
                        order=len(chunks),
                        text=stripped,
                        start_offset=chunk_start,
                        end_offset=chunk_start + len(stripped),
                    )
                )

            if end >= len(text):
                break
            start = max(start + 1, end - overlap_chars, 1)

        return chunks
