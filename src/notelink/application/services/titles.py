"""Title suggestion with a plain-text fallback."""

import logging

from notelink.application.ports import TitleGenerator
from notelink.application.services.note_text import derive_title
from notelink.domain.exceptions import UpstreamUnavailable

logger = logging.getLogger(__name__)


async def suggest_title(content: str, generator: TitleGenerator | None = None) -> str:
    """Generated title for the content; the first line when generation is off or fails."""
    if generator is None or not (content or "").strip():
        return derive_title(content)
    try:
        title = (await generator.generate_title(content) or "").strip()
    except UpstreamUnavailable as e:
        logger.warning("title generation unavailable: %s", e)
        title = ""
    return title or derive_title(content)
