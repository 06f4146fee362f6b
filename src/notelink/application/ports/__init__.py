"""Application ports - interfaces for external adapters."""

from notelink.application.ports.chunker import Chunker
from notelink.application.ports.embedding_provider import EmbeddingProvider
from notelink.application.ports.enrichment_scheduler import EnrichmentScheduler
from notelink.application.ports.event_publisher import NoteEventPublisher
from notelink.application.ports.extractors import EntityExtractor, TagExtractor, TitleGenerator
from notelink.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "Chunker",
    "EmbeddingProvider",
    "EnrichmentScheduler",
    "EntityExtractor",
    "NoteEventPublisher",
    "TagExtractor",
    "TitleGenerator",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
