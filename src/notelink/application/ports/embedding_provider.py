"""Embedding provider port - OpenAI compatible API."""

from typing import Protocol


class EmbeddingProvider(Protocol):
    """Port for generating text embeddings.

    Raises UpstreamUnavailable when the backing service fails.
    """

    async def embed(self, texts: list[str]) -> list[list[float]]: ...
