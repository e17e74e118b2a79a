"""Domain models shared by the extraction pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class TranslatableType(StrEnum):
    """Where a translatable fragment was found."""

    ERB = "erb"  # Quoted literal inside <% ... %>
    HTML = "html"  # Text node between > and <


class WarningKind(StrEnum):
    """Non-fatal problems surfaced while rewriting a template."""

    AMBIGUOUS = "ambiguous_substitution"
    UNMATCHED = "unmatched"
    OVERLAP = "overlapping_substitution"
    KEY_COLLISION = "key_collision"


@dataclass(frozen=True)
class Candidate:
    """A raw text span proposed by a scanner.

    ``start``/``end`` locate ``text`` in the untouched source buffer. They are
    ``None`` when the span has no contiguous counterpart there.
    """

    text: str
    type: TranslatableType
    start: int | None = None
    end: int | None = None


@dataclass(frozen=True)
class Translatable:
    """A fragment of template text to be replaced by an I18n lookup.

    Attributes:
        original: Raw span exactly as found in the source
        text: Core phrase, decoration stripped, double quotes backslash-escaped
        key: Lookup key derived from ``text``
        prefix: Leading decoration (quote, comma/period, 's, --, whitespace)
        suffix: Trailing decoration (colon, whitespace, asterisk, comma)
        type: ``erb`` or ``html``
        start: Offset of ``original`` in the source it was scanned from
        end: End offset of ``original`` in that source
    """

    original: str
    text: str
    key: str
    prefix: str = ""
    suffix: str = ""
    type: TranslatableType = TranslatableType.HTML
    start: int | None = field(default=None, compare=False, repr=False)
    end: int | None = field(default=None, compare=False, repr=False)

    @property
    def decorated(self) -> bool:
        """Whether a prefix or suffix has to survive outside the lookup."""
        return bool(self.prefix or self.suffix)

    @property
    def span(self) -> tuple[int, int] | None:
        if self.start is None or self.end is None:
            return None
        return self.start, self.end

    def to_dict(self) -> dict[str, str]:
        return {
            "original": self.original,
            "text": self.text,
            "key": self.key,
            "prefix": self.prefix,
            "suffix": self.suffix,
            "type": str(self.type),
        }


@dataclass(frozen=True)
class SubstitutionWarning:
    """A latent rewrite hazard, reported instead of silently swallowed."""

    kind: WarningKind
    key: str
    message: str
    occurrences: int = 0
