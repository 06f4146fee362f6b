"""Chunker port - text splitting strategies."""

from typing import Protocol

from notelink.application.dto.chunking_config import ChunkingConfig
from notelink.domain.value_objects import TextChunk


class Chunker(Protocol):
    """Port for splitting text into ordered chunks."""

    def chunk(self, text: str, config: ChunkingConfig | None = None) -> list[TextChunk]: ...
