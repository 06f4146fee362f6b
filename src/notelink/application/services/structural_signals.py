"""Default structural signal provider: title mentions and same-day edits."""

from datetime import timedelta

from notelink.domain.entities import Note
from notelink.domain.scoring import TagNormalizer, to_weighted_set
from notelink.domain.value_objects import StructuralSignals

MIN_TITLE_CHARS = 3
SAME_DAY = timedelta(hours=24)


class StructuralSignalProvider:
    """Compute reference and temporal boosts for a note pair.

    Sessions are not tracked, so session_score is always 0.
    """

    def __init__(self, tag_normalizer: TagNormalizer | None = None) -> None:
        self._tag_normalizer = tag_normalizer or TagNormalizer()

    def compute(self, source: Note, target: Note) -> StructuralSignals:
        return StructuralSignals(
            reference_score=1.0 if self._mentions(source, target) else 0.0,
            temporal_score=1.0 if self._edited_together(source, target) else 0.0,
        )

    @staticmethod
    def _mentions(a: Note, b: Note) -> bool:
        for note, other in ((a, b), (b, a)):
            title = " ".join((other.title or "").split()).lower()
            if len(title) >= MIN_TITLE_CHARS and title in " ".join(note.content.split()).lower():
                return True
        return False

    def _edited_together(self, a: Note, b: Note) -> bool:
        if abs(a.updated_at - b.updated_at) > SAME_DAY:
            return False
        shared_tags = set(self._tag_normalizer.normalize(a.tags)) & set(
            self._tag_normalizer.normalize(b.tags)
        )
        if shared_tags:
            return True
        return bool(set(to_weighted_set(a.entities)) & set(to_weighted_set(b.entities)))
