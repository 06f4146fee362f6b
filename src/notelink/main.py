"""Application entry point and composition root."""

import logging

import falcon
import falcon.asgi

from notelink import __version__
from notelink.application.dto.chunking_config import ChunkingConfig
from notelink.application.services.signal_resolver import SignalResolver
from notelink.application.use_cases.enrichment.enrich_note import EnrichNoteUseCase
from notelink.application.use_cases.links.find_links import FindLinksUseCase
from notelink.application.use_cases.links.global_links import GlobalLinksUseCase
from notelink.application.use_cases.note.create_note import CreateNoteUseCase
from notelink.application.use_cases.note.delete_note import DeleteNoteUseCase
from notelink.application.use_cases.note.get_note import GetNoteUseCase
from notelink.application.use_cases.note.update_note import UpdateNoteUseCase
from notelink.application.use_cases.search.search_notes import SearchNotesUseCase
from notelink.config import Settings, get_settings
from notelink.domain.exceptions import NotFound, UpstreamUnavailable, ValidationError
from notelink.domain.scoring import TagNormalizer
from notelink.infrastructure.chunking.sentence_chunker import SentenceChunker
from notelink.infrastructure.embedding.openai_provider import OpenAIEmbeddingProvider
from notelink.infrastructure.events.note_event_bus import NoteEventBus
from notelink.infrastructure.extraction.openai_extractors import (
    OpenAIEntityExtractor,
    OpenAITagExtractor,
    OpenAITitleGenerator,
)
from notelink.infrastructure.persistence.postgres.connection import create_pool
from notelink.infrastructure.persistence.postgres.unit_of_work import create_uow_factory
from notelink.infrastructure.tasks.enrichment_queue import EnrichmentQueue
from notelink.interfaces.api.middleware.cors import CORSMiddleware
from notelink.interfaces.api.middleware.lifespan import LifespanMiddleware
from notelink.interfaces.api.resources.events import NoteEventsResource
from notelink.interfaces.api.resources.health import HealthResource
from notelink.interfaces.api.resources.links import GlobalLinksResource, NoteLinksResource
from notelink.interfaces.api.resources.notes import (
    NoteResource,
    NoteSearchResource,
    NotesResource,
)

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


def main() -> None:
    """CLI entry point."""
    print(f"NoteLink v{__version__}")


async def handle_not_found(req, resp, ex, params):
    resp.status = falcon.HTTP_404
    kind = ex.args[0] if ex.args else "Resource"
    resp.media = {"error": f"{kind} not found"}


async def handle_validation_error(req, resp, ex, params):
    resp.status = falcon.HTTP_400
    resp.media = {"error": str(ex)}


async def handle_upstream_unavailable(req, resp, ex, params):
    logger.warning("upstream unavailable on %s %s: %s", req.method, req.path, ex)
    resp.status = falcon.HTTP_503
    resp.media = {"error": str(ex) or "Upstream service unavailable"}


async def log_exception(req, resp, ex, params):
    logger.error("unhandled error on %s %s", req.method, req.path, exc_info=ex)
    resp.status = falcon.HTTP_500
    resp.media = {"title": "500 Internal Server Error"}


def create_app(
    notes_resource: NotesResource,
    note_resource: NoteResource,
    note_links_resource: NoteLinksResource,
    global_links_resource: GlobalLinksResource,
    note_events_resource: NoteEventsResource,
    health_resource: HealthResource,
    note_search_resource: NoteSearchResource,
    middleware: list | None = None,
) -> falcon.asgi.App:
    """Create Falcon ASGI app with routes and error handlers."""
    app = falcon.asgi.App(middleware=middleware or [])
    app.add_error_handler(Exception, log_exception)
    app.add_error_handler(NotFound, handle_not_found)
    app.add_error_handler(ValidationError, handle_validation_error)
    app.add_error_handler(UpstreamUnavailable, handle_upstream_unavailable)
    app.add_route("/v1/health", health_resource)
    app.add_route("/v1/health/ready", health_resource, suffix="ready")
    app.add_route("/v1/notes", notes_resource)
    app.add_route("/v1/notes/search", note_search_resource)
    app.add_route("/v1/notes/{note_id}", note_resource)
    app.add_route("/v1/notes/{note_id}/links", note_links_resource)
    app.add_route("/v1/notes/{note_id}/events", note_events_resource)
    app.add_route("/v1/links", global_links_resource)
    return app


def create_notelink_app(settings: Settings | None = None) -> falcon.asgi.App:
    """Composition root - build Falcon app with all dependencies."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    pool = create_pool(
        settings.database_url,
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size,
    )
    uow_factory = create_uow_factory(pool)
    tag_normalizer = TagNormalizer(
        synonyms=settings.tag_synonyms,
        stoplist=settings.tag_stoplist,
    )

    embedding_provider = OpenAIEmbeddingProvider(
        base_url=settings.embedding_api_url,
        api_key=settings.embedding_api_key,
        model=settings.embedding_model,
        timeout=settings.upstream_timeout_seconds,
    )
    tag_extractor = OpenAITagExtractor(
        base_url=settings.embedding_api_url,
        api_key=settings.embedding_api_key,
        model=settings.extraction_model,
        timeout=settings.upstream_timeout_seconds,
    )
    entity_extractor = OpenAIEntityExtractor(
        base_url=settings.embedding_api_url,
        api_key=settings.embedding_api_key,
        model=settings.extraction_model,
        timeout=settings.upstream_timeout_seconds,
    )
    title_generator = (
        OpenAITitleGenerator(
            base_url=settings.embedding_api_url,
            api_key=settings.embedding_api_key,
            model=settings.extraction_model,
            timeout=settings.upstream_timeout_seconds,
        )
        if settings.auto_title
        else None
    )
    event_bus = NoteEventBus()

    enrich_note = EnrichNoteUseCase(
        unit_of_work_factory=uow_factory,
        chunker=SentenceChunker(),
        embedding_provider=embedding_provider,
        tag_extractor=tag_extractor,
        entity_extractor=entity_extractor,
        event_publisher=event_bus,
        chunking_config=ChunkingConfig(
            target_tokens=settings.chunk_target_tokens,
            overlap_tokens=settings.chunk_overlap_tokens,
            max_chars_per_chunk=settings.chunk_max_chars,
        ),
        tag_normalizer=tag_normalizer,
    )
    enrichment_queue = EnrichmentQueue(enrich_note, workers=settings.enrichment_workers)
    signal_resolver = SignalResolver(embedding_provider, tag_extractor)

    find_links = FindLinksUseCase(
        unit_of_work_factory=uow_factory,
        signal_resolver=signal_resolver,
        tag_normalizer=tag_normalizer,
        aggregate=settings.semantic_aggregate,
        use_tag_idf=settings.use_tag_idf,
        max_results=settings.link_max_results,
    )
    global_links = GlobalLinksUseCase(
        unit_of_work_factory=uow_factory,
        signal_resolver=signal_resolver,
        tag_normalizer=tag_normalizer,
        min_similarity=settings.link_min_similarity,
        top_k=settings.link_top_k,
        aggregate=settings.semantic_aggregate,
        use_tag_idf=settings.use_tag_idf,
        resolve_concurrency=settings.link_resolve_concurrency,
    )

    cors_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    return create_app(
        notes_resource=NotesResource(
            CreateNoteUseCase(uow_factory, enrichment_queue, title_generator)
        ),
        note_resource=NoteResource(
            GetNoteUseCase(uow_factory),
            UpdateNoteUseCase(uow_factory, enrichment_queue, title_generator),
            DeleteNoteUseCase(uow_factory),
        ),
        note_links_resource=NoteLinksResource(
            find_links,
            default_min_similarity=settings.link_min_similarity,
            default_top_k=settings.link_top_k,
        ),
        global_links_resource=GlobalLinksResource(global_links),
        note_events_resource=NoteEventsResource(event_bus),
        health_resource=HealthResource(pool, enrichment_queue),
        note_search_resource=NoteSearchResource(
            SearchNotesUseCase(uow_factory, embedding_provider)
        ),
        middleware=[
            CORSMiddleware(cors_origins),
            LifespanMiddleware(pool, enrichment_queue),
        ],
    )


def run_server() -> None:
    """Run uvicorn server."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        create_notelink_app(settings),
        host="0.0.0.0",
        port=8000,
        log_level=settings.log_level.lower(),
    )
