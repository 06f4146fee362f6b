"""Best-effort resolution of missing note-level embedding and tags."""

import logging
from dataclasses import replace

from notelink.application.ports import EmbeddingProvider, TagExtractor
from notelink.application.services.note_text import build_note_text
from notelink.domain.entities import Note
from notelink.domain.exceptions import UpstreamUnavailable

logger = logging.getLogger(__name__)


class SignalResolver:
    """Fill in a note's missing embedding or tags before scoring.

    Upstream failures are logged and the note is returned with whatever it
    already had; scoring treats the missing signal as 0.
    """

    def __init__(
        self,
        embedding_provider: EmbeddingProvider,
        tag_extractor: TagExtractor,
    ) -> None:
        self._embedding_provider = embedding_provider
        self._tag_extractor = tag_extractor

    async def resolve(self, note: Note) -> Note:
        if note.embedding and note.tags:
            return note
        text = build_note_text(note.title, note.content)
        if not text:
            return note

        embedding = note.embedding
        tags = note.tags
        if not embedding:
            try:
                vectors = await self._embedding_provider.embed([text])
                embedding = vectors[0] if vectors else None
                logger.debug(
                    "computed missing embedding for note %s (len=%d)",
                    note.id,
                    len(embedding or []),
                )
            except UpstreamUnavailable as e:
                logger.warning("embedding unavailable for note %s: %s", note.id, e)
        if not tags:
            try:
                tags = await self._tag_extractor.extract_tags(text)
                logger.debug("computed missing tags for note %s (count=%d)", note.id, len(tags))
            except UpstreamUnavailable as e:
                logger.warning("tag extraction unavailable for note %s: %s", note.id, e)
        return replace(note, embedding=embedding, tags=list(tags or []))
