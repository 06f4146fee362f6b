"""OpenAI-compatible tag, entity and title extractors (JSON mode chat completions)."""

import json

import openai
from openai import AsyncOpenAI

from notelink.application.services.note_text import (
    MAX_GENERATED_TITLE_CHARS,
    UNTITLED,
    fallback_title_from_text,
)
from notelink.domain.exceptions import UpstreamUnavailable
from notelink.domain.value_objects import Entity

TAG_PROMPT = (
    "Extract 3-7 concise, lowercase topic tags from the user's text. "
    'Return only JSON: {"tags": ["tag1", "tag2"]}.'
)

ENTITY_PROMPT = (
    "Extract named entities, key concepts and proper nouns from the user's text, "
    "each with an importance weight from 1 to 3. Skip dates, numbers and generic "
    'headings. Return only JSON: {"entities": [{"entity": "...", "weight": 1}]}.'
)

TITLE_PROMPT = (
    "Generate a concise, descriptive title (max 8 words) for the user's text. "
    'Return only JSON: {"title": "Your Title"}.'
)

MAX_ENTITY_WEIGHT = 10.0


class _JSONChatClient:
    """Sends a system prompt plus text and returns the parsed JSON object."""

    def __init__(self, base_url: str, api_key: str, model: str, timeout: float) -> None:
        self._client = AsyncOpenAI(base_url=base_url, api_key=api_key, timeout=timeout)
        self._model = model

    async def complete(self, system_prompt: str, text: str) -> dict:
        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                temperature=0.2,
                response_format={"type": "json_object"},
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": text},
                ],
            )
        except openai.OpenAIError as e:
            raise UpstreamUnavailable(f"Extraction request failed: {e}") from e
        raw = response.choices[0].message.content if response.choices else None
        try:
            parsed = json.loads(raw or "")
        except json.JSONDecodeError as e:
            raise UpstreamUnavailable("Extraction returned invalid JSON") from e
        return parsed if isinstance(parsed, dict) else {}


class OpenAITagExtractor:
    """Tag extractor backed by a chat model."""

    def __init__(self, base_url: str, api_key: str, model: str, timeout: float = 30.0) -> None:
        self._chat = _JSONChatClient(base_url, api_key, model, timeout)

    async def extract_tags(self, text: str) -> list[str]:
        if not text.strip():
            return []
        parsed = await self._chat.complete(TAG_PROMPT, text)
        tags = parsed.get("tags")
        if not isinstance(tags, list):
            return []
        return [t for t in tags if isinstance(t, str)]


class OpenAIEntityExtractor:
    """Entity extractor backed by a chat model."""

    def __init__(self, base_url: str, api_key: str, model: str, timeout: float = 30.0) -> None:
        self._chat = _JSONChatClient(base_url, api_key, model, timeout)

    async def extract_entities(self, text: str) -> list[Entity]:
        if not text.strip():
            return []
        parsed = await self._chat.complete(ENTITY_PROMPT, text)
        items = parsed.get("entities")
        if not isinstance(items, list):
            return []
        out: list[Entity] = []
        for item in items:
            if not isinstance(item, dict):
                continue
            name = item.get("entity") or item.get("name")
            if not isinstance(name, str) or not name.strip():
                continue
            try:
                weight = float(item.get("weight", 1))
            except (TypeError, ValueError):
                weight = 1.0
            out.append(Entity(name=name, weight=max(0.0, min(MAX_ENTITY_WEIGHT, weight))))
        return out


class OpenAITitleGenerator:
    """Title generator backed by a chat model."""

    def __init__(self, base_url: str, api_key: str, model: str, timeout: float = 30.0) -> None:
        self._chat = _JSONChatClient(base_url, api_key, model, timeout)

    async def generate_title(self, text: str) -> str:
        if not text.strip():
            return UNTITLED
        parsed = await self._chat.complete(TITLE_PROMPT, text)
        title = parsed.get("title")
        title = title.strip() if isinstance(title, str) else ""
        if not title:
            title = fallback_title_from_text(text)
        return (title or UNTITLED)[:MAX_GENERATED_TITLE_CHARS]
