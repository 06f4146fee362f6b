"""Search notes use case - rank notes by embedding similarity to a query."""

import logging

from notelink.application.dto.note_dto import NoteSearchInput, NoteSearchResult
from notelink.application.ports import EmbeddingProvider
from notelink.domain.exceptions import UpstreamUnavailable, ValidationError
from notelink.domain.scoring import cosine_similarity

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 20
MAX_LIMIT = 100


class SearchNotesUseCase:
    """Embed the query and compare it with every stored note embedding."""

    def __init__(
        self,
        unit_of_work_factory: type,
        embedding_provider: EmbeddingProvider,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._embedding_provider = embedding_provider

    async def execute(self, input_data: NoteSearchInput) -> list[NoteSearchResult]:
        """Notes with an embedding, most similar first, at most `limit` of them."""
        if not isinstance(input_data.query, str) or not input_data.query.strip():
            raise ValidationError("query must be a non-empty string")
        limit = input_data.limit
        if isinstance(limit, bool) or not isinstance(limit, int) or not 1 <= limit <= MAX_LIMIT:
            raise ValidationError(f"limit must be an integer between 1 and {MAX_LIMIT}")

        vectors = await self._embedding_provider.embed([input_data.query])
        if not vectors:
            raise UpstreamUnavailable("Embedding service returned no vector for the query")
        query_vector = vectors[0]

        async with self._uow_factory() as uow:
            notes = await uow.notes.list_all()

        results = [
            NoteSearchResult(
                id=n.id,
                title=n.title,
                created_at=n.created_at,
                updated_at=n.updated_at,
                score=cosine_similarity(query_vector, n.embedding),
            )
            for n in notes
            if n.embedding
        ]
        results.sort(key=lambda r: r.score, reverse=True)
        logger.debug("search %r: %d notes with embeddings", input_data.query[:80], len(results))
        return results[:limit]
