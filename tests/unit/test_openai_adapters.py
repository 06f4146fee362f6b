"""Unit tests for the OpenAI-compatible embedding and extraction adapters."""

from types import SimpleNamespace
from unittest.mock import AsyncMock

import httpx
import openai
import pytest

from notelink.domain.exceptions import UpstreamUnavailable
from notelink.domain.value_objects import Entity
from notelink.infrastructure.embedding.openai_provider import OpenAIEmbeddingProvider
from notelink.infrastructure.extraction.openai_extractors import (
    OpenAIEntityExtractor,
    OpenAITagExtractor,
    OpenAITitleGenerator,
)


def _chat_response(content: str | None) -> SimpleNamespace:
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


def _connection_error() -> openai.APIConnectionError:
    return openai.APIConnectionError(request=httpx.Request("POST", "http://test/v1"))


@pytest.fixture
def embedding_provider() -> OpenAIEmbeddingProvider:
    return OpenAIEmbeddingProvider(base_url="http://test/v1", api_key="k", model="m")


@pytest.mark.asyncio
async def test_embed_orders_by_index(embedding_provider) -> None:
    data = [SimpleNamespace(index=1, embedding=[0.2]), SimpleNamespace(index=0, embedding=[0.1])]
    embedding_provider._client.embeddings.create = AsyncMock(return_value=SimpleNamespace(data=data))
    assert await embedding_provider.embed(["a", "b"]) == [[0.1], [0.2]]


@pytest.mark.asyncio
async def test_embed_empty_input_skips_request(embedding_provider) -> None:
    embedding_provider._client.embeddings.create = AsyncMock()
    assert await embedding_provider.embed([]) == []
    embedding_provider._client.embeddings.create.assert_not_awaited()


@pytest.mark.asyncio
async def test_embed_wraps_client_errors(embedding_provider) -> None:
    embedding_provider._client.embeddings.create = AsyncMock(side_effect=_connection_error())
    with pytest.raises(UpstreamUnavailable):
        await embedding_provider.embed(["a"])


@pytest.mark.asyncio
async def test_extract_tags() -> None:
    extractor = OpenAITagExtractor(base_url="http://test/v1", api_key="k", model="m")
    extractor._chat._client.chat.completions.create = AsyncMock(
        return_value=_chat_response('{"tags": ["python", 3, "asyncio"]}')
    )
    assert await extractor.extract_tags("text") == ["python", "asyncio"]
    assert await extractor.extract_tags("   ") == []


@pytest.mark.asyncio
async def test_extract_tags_invalid_json_is_upstream_error() -> None:
    extractor = OpenAITagExtractor(base_url="http://test/v1", api_key="k", model="m")
    extractor._chat._client.chat.completions.create = AsyncMock(return_value=_chat_response("nope"))
    with pytest.raises(UpstreamUnavailable):
        await extractor.extract_tags("text")


@pytest.mark.asyncio
async def test_extract_entities_clamps_weights() -> None:
    extractor = OpenAIEntityExtractor(base_url="http://test/v1", api_key="k", model="m")
    extractor._chat._client.chat.completions.create = AsyncMock(
        return_value=_chat_response(
            '{"entities": [{"entity": "Python", "weight": 2}, {"name": "Go", "weight": 99},'
            ' {"entity": "Rust", "weight": "heavy"}, {"weight": 1}, "junk"]}'
        )
    )
    assert await extractor.extract_entities("text") == [
        Entity("Python", 2.0),
        Entity("Go", 10.0),
        Entity("Rust", 1.0),
    ]


@pytest.mark.asyncio
async def test_extract_entities_wraps_client_errors() -> None:
    extractor = OpenAIEntityExtractor(base_url="http://test/v1", api_key="k", model="m")
    extractor._chat._client.chat.completions.create = AsyncMock(side_effect=_connection_error())
    with pytest.raises(UpstreamUnavailable):
        await extractor.extract_entities("text")


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("content", "expected"),
    [
        ('{"title": "  Vacuum Basics  "}', "Vacuum Basics"),
        ('{"title": ""}', "Postgres vacuum."),
        ('{"headline": "x"}', "Postgres vacuum."),
        ('{"title": "' + "w" * 100 + '"}', "w" * 80),
    ],
)
async def test_generate_title(content: str, expected: str) -> None:
    generator = OpenAITitleGenerator(base_url="http://test/v1", api_key="k", model="m")
    generator._chat._client.chat.completions.create = AsyncMock(
        return_value=_chat_response(content)
    )
    assert await generator.generate_title("Postgres vacuum. Reclaims dead tuples.") == expected


@pytest.mark.asyncio
async def test_generate_title_blank_text_skips_request() -> None:
    generator = OpenAITitleGenerator(base_url="http://test/v1", api_key="k", model="m")
    generator._chat._client.chat.completions.create = AsyncMock()
    assert await generator.generate_title("  ") == "Untitled"
    generator._chat._client.chat.completions.create.assert_not_awaited()


@pytest.mark.asyncio
async def test_generate_title_wraps_client_errors() -> None:
    generator = OpenAITitleGenerator(base_url="http://test/v1", api_key="k", model="m")
    generator._chat._client.chat.completions.create = AsyncMock(side_effect=_connection_error())
    with pytest.raises(UpstreamUnavailable):
        await generator.generate_title("text")
