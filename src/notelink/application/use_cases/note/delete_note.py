"""Delete note use case."""

from uuid import UUID

from notelink.domain.exceptions import NotFound


class DeleteNoteUseCase:
    """Delete a note together with its chunks."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, note_id: UUID) -> None:
        async with self._uow_factory() as uow:
            note = await uow.notes.get_by_id(note_id)
            if not note:
                raise NotFound("Note", str(note_id))
            await uow.chunks.delete_by_note_id(note_id)
            await uow.notes.delete(note_id)
