"""Split a raw span into decorative prefix, core phrase and suffix."""

from __future__ import annotations

import re

# Opening quote, leading comma/period, possessive 's, double dash, whitespace
PREFIX_RE = re.compile(r"^(?P<prefix>\"?[,.]?(?:'s)?(?:--)?\s*)")
# Colon, whitespace, asterisk, comma, whitespace at the very end
SUFFIX_RE = re.compile(r"(?P<suffix>:?\s*\*?,?\s*)\Z")


def escape(core: str) -> str:
    return core.replace('"', '\\"')


def unescape(text: str) -> str:
    return text.replace('\\"', '"')


def decompose(original: str) -> tuple[str, str, str]:
    """Decompose ``original`` into ``(prefix, text, suffix)``.

    Both decoration patterns can match the empty string, so this never fails.
    The suffix is searched in what remains after the prefix, which keeps
    ``prefix + unescape(text) + suffix == original`` even for spans made of
    decoration only.

    Examples:
        " simple text: " -> (" ", "simple text", ": ")
        "'s simple text: " -> ("'s ", "simple text", ": ")
        ', "complex" text: ' -> (", ", '\\"complex\\" text', ": ")
    """
    prefix_match = PREFIX_RE.match(original)
    prefix = prefix_match.group("prefix") if prefix_match else ""
    remainder = original[len(prefix) :]

    suffix_match = SUFFIX_RE.search(remainder)
    suffix = suffix_match.group("suffix") if suffix_match else ""
    core = remainder[: len(remainder) - len(suffix)]

    return prefix, escape(core), suffix
