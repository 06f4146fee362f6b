"""Get note use case."""

from uuid import UUID

from notelink.application.dto.note_dto import NoteOutput
from notelink.domain.exceptions import NotFound


class GetNoteUseCase:
    """Get note by id."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, note_id: UUID) -> NoteOutput:
        async with self._uow_factory() as uow:
            note = await uow.notes.get_by_id(note_id)
            if not note:
                raise NotFound("Note", str(note_id))
            return NoteOutput.from_note(note)
