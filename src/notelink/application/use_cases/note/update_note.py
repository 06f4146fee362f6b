"""Update note use case."""

from dataclasses import replace
from datetime import UTC, datetime

from notelink.application.dto.note_dto import NoteOutput, NoteUpdateInput
from notelink.application.ports import EnrichmentScheduler, TitleGenerator
from notelink.application.services.note_text import derive_title
from notelink.application.services.titles import suggest_title
from notelink.domain.entities import Note
from notelink.domain.exceptions import NotFound, ValidationError


class UpdateNoteUseCase:
    """Update title/content and re-queue enrichment when content changed.

    Without an explicit title, a content change re-titles the note: always
    when a title generator is configured, otherwise only while the title is
    still the one derived from the old content.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        enrichment_scheduler: EnrichmentScheduler,
        title_generator: TitleGenerator | None = None,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._enrichment_scheduler = enrichment_scheduler
        self._title_generator = title_generator

    async def execute(self, input_data: NoteUpdateInput) -> NoteOutput:
        """Update note."""
        if input_data.content is not None and not isinstance(input_data.content, str):
            raise ValidationError("content must be a string")

        async with self._uow_factory() as uow:
            note = await uow.notes.get_by_id(input_data.note_id)
        if not note:
            raise NotFound("Note", str(input_data.note_id))

        content = note.content if input_data.content is None else input_data.content
        # generation runs outside the transaction
        title = await self._next_title(note, content, input_data.title)

        async with self._uow_factory() as uow:
            current = await uow.notes.get_by_id(input_data.note_id)
            if not current:
                raise NotFound("Note", str(input_data.note_id))
            changed = content != current.content or title != current.title
            note = replace(
                current,
                title=title,
                content=content,
                updated_at=datetime.now(UTC),
            )
            await uow.notes.update(note)

        if changed:
            self._enrichment_scheduler.schedule(note.id)
        return NoteOutput.from_note(note)

    async def _next_title(self, note: Note, content: str, requested: str | None) -> str:
        if requested is not None:
            return requested.strip() or await suggest_title(content, self._title_generator)
        if content == note.content:
            return note.title
        if self._title_generator is not None or note.title == derive_title(note.content):
            return await suggest_title(content, self._title_generator)
        return note.title
