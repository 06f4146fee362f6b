"""Domain exceptions."""


class NoteLinkError(Exception):
    """Base exception for NoteLink."""

    pass


class NotFound(NoteLinkError):
    """Requested resource was not found."""

    pass


class ValidationError(NoteLinkError):
    """Validation failed for input data."""

    pass


class UpstreamUnavailable(NoteLinkError):
    """Embedding, tag or entity generation service failed or timed out."""

    pass
