"""NoteLink - multi-signal note relationship scoring service."""

__version__ = "0.1.0"
