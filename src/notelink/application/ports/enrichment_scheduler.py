"""Enrichment scheduler port - background post-save processing."""

from typing import Protocol
from uuid import UUID


class EnrichmentScheduler(Protocol):
    """Port for queueing best-effort enrichment of a saved note."""

    def schedule(self, note_id: UUID) -> None: ...
