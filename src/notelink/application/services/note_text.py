"""Plain-text helpers for notes."""

import re

MAX_TITLE_CHARS = 120
MAX_GENERATED_TITLE_CHARS = 80
FALLBACK_TITLE_WORDS = 8
UNTITLED = "Untitled"

_FIRST_SENTENCE = re.compile(r"^(.*?[.!?])\s")


def derive_title(content: str) -> str:
    """First non-empty line of the content, cut to MAX_TITLE_CHARS."""
    for line in (content or "").splitlines():
        line = line.strip()
        if line:
            return line[:MAX_TITLE_CHARS]
    return ""


def fallback_title_from_text(text: str) -> str:
    """First sentence, else the first eight words, else "Untitled"."""
    cleaned = " ".join((text or "").split())
    if not cleaned:
        return UNTITLED
    m = _FIRST_SENTENCE.match(cleaned)
    guess = m.group(1) if m else " ".join(cleaned.split(" ")[:FALLBACK_TITLE_WORDS])
    return guess.strip() or UNTITLED


def build_note_text(title: str | None, content: str | None) -> str:
    """Text sent to the embedding and extraction services for a whole note."""
    title_part = f"Title: {title.strip()}" if title and title.strip() else ""
    body = " ".join((content or "").split())
    return "\n\n".join(p for p in (title_part, body) if p).strip()
