"""Link suggestion API resources."""

import math

import falcon.asgi

from notelink.application.dto.link_dto import FindLinksInput, LinkSuggestion
from notelink.application.use_cases.links.find_links import FindLinksUseCase
from notelink.application.use_cases.links.global_links import GlobalLinksUseCase
from notelink.domain.exceptions import NotFound
from notelink.interfaces.api.resources.notes import parse_note_id

MIN_TOP_K = 1
MAX_TOP_K = 25


def _float_param(req: falcon.asgi.Request, name: str, default: float) -> float:
    raw = req.get_param(name)
    if raw is None or raw == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return default if math.isnan(value) else value


def _int_param(req: falcon.asgi.Request, name: str, default: int) -> int:
    raw = req.get_param(name)
    if raw is None or raw == "":
        return default
    try:
        return int(float(raw))
    except (ValueError, OverflowError):
        return default


def suggestion_to_dict(s: LinkSuggestion) -> dict:
    return {
        "id": str(s.candidate_id),
        "title": s.title,
        "score": round(s.score, 6),
        "decision": str(s.decision),
        "explain": {
            "top_cosines": [round(c, 6) for c in s.explain.top_cosines],
            "shared_entities": list(s.explain.shared_entities),
            "shared_tags": list(s.explain.shared_tags),
        },
        "features": {k: round(v, 6) for k, v in s.features.to_dict().items()},
        "matches": [
            {
                "similarity": round(m.similarity, 3),
                "source_chunk": m.source_chunk_order,
                "source_text": m.source_text,
                "target_chunk": m.target_chunk_order,
                "target_text": m.target_text,
            }
            for m in s.matches
        ],
    }


class NoteLinksResource:
    """GET /v1/notes/{note_id}/links?min=&topk= - ranked link suggestions."""

    def __init__(
        self,
        find_links: FindLinksUseCase,
        default_min_similarity: float = 0.7,
        default_top_k: int = 3,
    ) -> None:
        self._find_links = find_links
        self._default_min = default_min_similarity
        self._default_top_k = default_top_k

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, note_id: str
    ) -> None:
        """Rank every other note as a link candidate."""
        nid = parse_note_id(note_id)
        if nid is None:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid UUID"}
            return
        min_similarity = min(1.0, max(0.0, _float_param(req, "min", self._default_min)))
        top_k = min(MAX_TOP_K, max(MIN_TOP_K, _int_param(req, "topk", self._default_top_k)))

        try:
            suggestions = await self._find_links.execute(
                FindLinksInput(note_id=nid, min_similarity=min_similarity, top_k=top_k)
            )
        except NotFound:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Note not found"}
            return

        resp.cache_control = ["no-store"]
        resp.media = {
            "id": str(nid),
            "min": min_similarity,
            "topk": top_k,
            "suggestions": [suggestion_to_dict(s) for s in suggestions],
        }
        resp.status = falcon.HTTP_200


class GlobalLinksResource:
    """GET /v1/links - every linked note pair as "A->B" text lines."""

    def __init__(self, global_links: GlobalLinksUseCase) -> None:
        self._global_links = global_links

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        edges = await self._global_links.execute()
        resp.content_type = falcon.MEDIA_TEXT
        resp.cache_control = ["no-store"]
        resp.text = "\n".join(f"{e.source_title}->{e.target_title}" for e in edges)
        resp.status = falcon.HTTP_200
