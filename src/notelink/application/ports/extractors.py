"""Tag and entity extractor ports - best-effort upstream services."""

from typing import Protocol

from notelink.domain.value_objects import Entity


class TagExtractor(Protocol):
    """Port for extracting short topic tags from text."""

    async def extract_tags(self, text: str) -> list[str]: ...


class EntityExtractor(Protocol):
    """Port for extracting weighted named entities from text."""

    async def extract_entities(self, text: str) -> list[Entity]: ...


class TitleGenerator(Protocol):
    """Port for generating a short descriptive title for a note."""

    async def generate_title(self, text: str) -> str: ...
