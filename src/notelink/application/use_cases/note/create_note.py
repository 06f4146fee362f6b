"""Create note use case."""

from datetime import UTC, datetime
from uuid import uuid4

from notelink.application.dto.note_dto import NoteCreateInput, NoteOutput
from notelink.application.ports import EnrichmentScheduler, TitleGenerator
from notelink.application.services.titles import suggest_title
from notelink.domain.entities import Note
from notelink.domain.exceptions import ValidationError


class CreateNoteUseCase:
    """Create a note and queue its enrichment (chunks, embedding, tags, entities)."""

    def __init__(
        self,
        unit_of_work_factory: type,
        enrichment_scheduler: EnrichmentScheduler,
        title_generator: TitleGenerator | None = None,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._enrichment_scheduler = enrichment_scheduler
        self._title_generator = title_generator

    async def execute(self, input_data: NoteCreateInput) -> NoteOutput:
        """Create note; a missing title is generated from the content."""
        if not isinstance(input_data.content, str):
            raise ValidationError("content must be a string")

        title = (input_data.title or "").strip() or await suggest_title(
            input_data.content, self._title_generator
        )
        now = datetime.now(UTC)
        note = Note(
            id=uuid4(),
            title=title,
            content=input_data.content,
            created_at=now,
            updated_at=now,
        )
        async with self._uow_factory() as uow:
            await uow.notes.create(note)

        self._enrichment_scheduler.schedule(note.id)
        return NoteOutput.from_note(note)
