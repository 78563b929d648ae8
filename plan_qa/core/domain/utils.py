"""Text helpers shared by the domain services.

Text entering the pipeline (extracted pages, user questions) is cleaned once
at the boundary: byte-order marks and replacement characters are dropped and
whitespace runs collapse to a single space. Internal code assumes clean text.
"""

import re
import unicodedata

_WHITESPACE_RE = re.compile(r"\s+")


def clean_text(text: str, *, normalize: bool = False) -> str:
    """Remove BOM markers and optionally apply NFKC normalization.

    Args:
        text: Input text that may contain BOM or replacement characters.
        normalize: Whether to apply NFKC normalization.

    Returns:
        Cleaned text, or ``""`` for empty input.
    """
    if not text:
        return ""

    cleaned = text.replace("\ufeff", "").replace("\ufffd", "")
    if normalize:
        cleaned = unicodedata.normalize("NFKC", cleaned)
    return cleaned


def collapse_whitespace(text: str) -> str:
    """Collapse whitespace runs to one space and trim both ends."""
    return _WHITESPACE_RE.sub(" ", clean_text(text)).strip()
