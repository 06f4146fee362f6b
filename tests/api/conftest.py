"""Fixtures for API tests."""

import pytest
from falcon.testing import TestClient

from notelink.application.services.signal_resolver import SignalResolver
from notelink.application.use_cases.links.find_links import FindLinksUseCase
from notelink.application.use_cases.links.global_links import GlobalLinksUseCase
from notelink.application.use_cases.note.create_note import CreateNoteUseCase
from notelink.application.use_cases.note.delete_note import DeleteNoteUseCase
from notelink.application.use_cases.note.get_note import GetNoteUseCase
from notelink.application.use_cases.note.update_note import UpdateNoteUseCase
from notelink.application.use_cases.search.search_notes import SearchNotesUseCase
from notelink.infrastructure.events.note_event_bus import NoteEventBus
from notelink.interfaces.api.resources.events import NoteEventsResource
from notelink.interfaces.api.resources.health import HealthResource
from notelink.interfaces.api.resources.links import GlobalLinksResource, NoteLinksResource
from notelink.interfaces.api.resources.notes import (
    NoteResource,
    NoteSearchResource,
    NotesResource,
)
from notelink.main import create_app


@pytest.fixture
def event_bus() -> NoteEventBus:
    return NoteEventBus()


@pytest.fixture
def app(uow_factory, scheduler, mock_embedding_provider, mock_tag_extractor, event_bus):
    """Falcon ASGI app wired to in-memory fakes."""
    resolver = SignalResolver(mock_embedding_provider, mock_tag_extractor)
    return create_app(
        notes_resource=NotesResource(CreateNoteUseCase(uow_factory, scheduler)),
        note_resource=NoteResource(
            GetNoteUseCase(uow_factory),
            UpdateNoteUseCase(uow_factory, scheduler),
            DeleteNoteUseCase(uow_factory),
        ),
        note_links_resource=NoteLinksResource(FindLinksUseCase(uow_factory, resolver)),
        global_links_resource=GlobalLinksResource(GlobalLinksUseCase(uow_factory, resolver)),
        note_events_resource=NoteEventsResource(event_bus, keepalive_seconds=0.05),
        health_resource=HealthResource(),
        note_search_resource=NoteSearchResource(
            SearchNotesUseCase(uow_factory, mock_embedding_provider)
        ),
    )


@pytest.fixture
def client(app) -> TestClient:
    """Falcon ASGI test client."""
    return TestClient(app)
