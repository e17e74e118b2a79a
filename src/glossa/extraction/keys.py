"""Lookup key derivation."""

from __future__ import annotations

import re

ESCAPED_QUOTE_RE = re.compile(r'\\"')
KEY_PUNCTUATION_RE = re.compile(r"[.,@/()\[\]|{}':+%=!&]")
WHITESPACE_RE = re.compile(r"\s+")


def derive_key(text: str) -> str:
    """Turn a normalized phrase into an identifier for a locale file.

    Escaped quotes are dropped together with the quote, punctuation is deleted,
    and the remaining words are lowercased and joined with underscores.

    Examples:
        "Show page" -> "show_page"
        'symbols @|/()[]{}\\':+%=!& removed' -> "symbols_removed"
        '\\"complex\\" text' -> "complex_text"
    """
    cleaned = ESCAPED_QUOTE_RE.sub("", text)
    cleaned = KEY_PUNCTUATION_RE.sub("", cleaned)
    return "_".join(WHITESPACE_RE.split(cleaned.lower().strip()))
