"""OpenAI-compatible embedding provider."""

import openai
from openai import AsyncOpenAI

from notelink.domain.exceptions import UpstreamUnavailable


class OpenAIEmbeddingProvider:
    """Embedding provider using OpenAI-compatible API."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        model: str,
        timeout: float = 30.0,
    ) -> None:
        self._client = AsyncOpenAI(base_url=base_url, api_key=api_key, timeout=timeout)
        self._model = model

    async def embed(self, texts: list[str]) -> list[list[float]]:
        """Generate embeddings for texts."""
        if not texts:
            return []
        try:
            response = await self._client.embeddings.create(
                model=self._model,
                input=texts,
            )
        except openai.OpenAIError as e:
            raise UpstreamUnavailable(f"Embedding request failed: {e}") from e
        return [d.embedding for d in sorted(response.data, key=lambda d: d.index)]
