"""Note API resources."""

from uuid import UUID

import falcon.asgi

from notelink.application.dto.note_dto import (
    NoteCreateInput,
    NoteOutput,
    NoteSearchInput,
    NoteSearchResult,
    NoteUpdateInput,
)
from notelink.application.use_cases.note.create_note import CreateNoteUseCase
from notelink.application.use_cases.note.delete_note import DeleteNoteUseCase
from notelink.application.use_cases.note.get_note import GetNoteUseCase
from notelink.application.use_cases.note.update_note import UpdateNoteUseCase
from notelink.application.use_cases.search.search_notes import DEFAULT_LIMIT, SearchNotesUseCase
from notelink.domain.exceptions import NotFound, ValidationError


def note_to_dict(n: NoteOutput) -> dict:
    return {
        "id": str(n.id),
        "title": n.title,
        "content": n.content,
        "tags": list(n.tags),
        "entities": [{"entity": e.name, "weight": e.weight} for e in n.entities],
        "has_embedding": n.has_embedding,
        "created_at": n.created_at.isoformat(),
        "updated_at": n.updated_at.isoformat(),
    }


def parse_note_id(raw: str) -> UUID | None:
    try:
        return UUID(raw)
    except ValueError:
        return None


class NotesResource:
    """POST /v1/notes - create note."""

    def __init__(self, create_note: CreateNoteUseCase) -> None:
        self._create_note = create_note

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Create note; enrichment runs in the background."""
        try:
            body = await req.get_media(default_when_empty={})
            content = body.get("content", "")
            title = body.get("title")
        except (AttributeError, falcon.HTTPBadRequest):
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid JSON body"}
            return
        if title is not None and not isinstance(title, str):
            resp.status = falcon.HTTP_400
            resp.media = {"error": "title must be a string"}
            return

        try:
            result = await self._create_note.execute(NoteCreateInput(content=content, title=title))
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return
        resp.media = note_to_dict(result)
        resp.status = falcon.HTTP_201


class NoteResource:
    """GET, PUT, DELETE /v1/notes/{note_id}."""

    def __init__(
        self,
        get_note: GetNoteUseCase,
        update_note: UpdateNoteUseCase,
        delete_note: DeleteNoteUseCase,
    ) -> None:
        self._get_note = get_note
        self._update_note = update_note
        self._delete_note = delete_note

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, note_id: str
    ) -> None:
        """Get note by id."""
        nid = parse_note_id(note_id)
        if nid is None:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid UUID"}
            return
        try:
            result = await self._get_note.execute(nid)
        except NotFound:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Note not found"}
            return
        resp.media = note_to_dict(result)
        resp.status = falcon.HTTP_200

    async def on_put(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, note_id: str
    ) -> None:
        """Update title and/or content."""
        nid = parse_note_id(note_id)
        if nid is None:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid UUID"}
            return
        try:
            body = await req.get_media(default_when_empty={})
            content = body.get("content")
            title = body.get("title")
        except (AttributeError, falcon.HTTPBadRequest):
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid JSON body"}
            return
        if title is not None and not isinstance(title, str):
            resp.status = falcon.HTTP_400
            resp.media = {"error": "title must be a string"}
            return

        try:
            result = await self._update_note.execute(
                NoteUpdateInput(note_id=nid, content=content, title=title)
            )
        except NotFound:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Note not found"}
            return
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return
        resp.media = note_to_dict(result)
        resp.status = falcon.HTTP_200

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, note_id: str
    ) -> None:
        """Delete note and its chunks."""
        nid = parse_note_id(note_id)
        if nid is None:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid UUID"}
            return
        try:
            await self._delete_note.execute(nid)
        except NotFound:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Note not found"}
            return
        resp.status = falcon.HTTP_204


def search_result_to_dict(r: NoteSearchResult) -> dict:
    return {
        "id": str(r.id),
        "title": r.title,
        "created_at": r.created_at.isoformat(),
        "updated_at": r.updated_at.isoformat(),
        "score": round(r.score, 6),
    }


class NoteSearchResource:
    """POST /v1/notes/search - semantic search over note embeddings."""

    def __init__(self, search_notes: SearchNotesUseCase) -> None:
        self._search_notes = search_notes

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Body: {"query": str, "limit": 1..100 (default 20)}."""
        try:
            body = await req.get_media(default_when_empty={})
            query = body.get("query")
            limit = body.get("limit", DEFAULT_LIMIT)
        except (AttributeError, falcon.HTTPBadRequest):
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid JSON body"}
            return

        results = await self._search_notes.execute(NoteSearchInput(query=query, limit=limit))
        resp.cache_control = ["no-store"]
        resp.media = [search_result_to_dict(r) for r in results]
        resp.status = falcon.HTTP_200
