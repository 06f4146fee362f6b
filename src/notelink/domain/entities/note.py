"""Note entity."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from notelink.domain.value_objects.entity import Entity


@dataclass
class Note:
    """Note with plain-text content and best-effort enrichment artifacts."""

    id: UUID
    title: str
    content: str
    created_at: datetime
    updated_at: datetime
    embedding: list[float] | None = None
    tags: list[str] = field(default_factory=list)
    entities: list[Entity] = field(default_factory=list)
