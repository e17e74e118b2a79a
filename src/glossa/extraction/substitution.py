"""Replace extracted fragments with I18n lookup calls.

ERB literals become ``t(".key")`` (or an interpolated string keeping their
decoration), HTML text nodes become ``<%= t(".key") %>`` with any decoration
left verbatim around the tag.

Two strategies:
- PLANNED computes every edit against the untouched source, drops edits that
  overlap an earlier one, and applies the rest in one left-to-right pass.
- SEQUENTIAL folds over the records, each replacement applied to the output
  of the previous one at the leftmost matching context.

Hazards (ambiguous or vanished matches, overlapping edits, key collisions) are
returned as SubstitutionWarning values and logged, never raised.
"""

from __future__ import annotations

import re
from collections import defaultdict
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

import structlog

from glossa.extraction.scanner import ERB_TAG_RE, QUOTED_LITERAL_RE, TEXT_NODE_RE
from glossa.models import SubstitutionWarning, TranslatableType, WarningKind

if TYPE_CHECKING:
    from collections.abc import Iterable

    from glossa.models import Translatable

log = structlog.get_logger()

# Tolerated around an undecorated phrase inside a text node
NODE_PADDING = r"[\s,:]*"
QUOTES = "\"'"


class SubstitutionStrategy(StrEnum):
    """How records are applied to a source buffer."""

    PLANNED = "planned"
    SEQUENTIAL = "sequential"


@dataclass(frozen=True)
class LookupStyle:
    """Rendering of the lookup call inserted in place of a literal."""

    function: str = "t"
    relative: bool = True

    def call(self, key: str) -> str:
        scope = "." if self.relative else ""
        return f'{self.function}("{scope}{key}")'

    def output_tag(self, key: str) -> str:
        return f"<%= {self.call(key)} %>"

    def interpolated(self, prefix: str, key: str, suffix: str) -> str:
        """Double-quoted Ruby string keeping decoration outside the lookup."""
        return f'"{_escape_quotes(prefix)}#{{{self.call(key)}}}{_escape_quotes(suffix)}"'


DEFAULT_LOOKUP = LookupStyle()


@dataclass(frozen=True)
class Edit:
    """Replace ``source[start:end]`` with ``replacement``."""

    start: int
    end: int
    replacement: str
    translatable: Translatable

    def overlaps(self, start: int, end: int) -> bool:
        return self.start < end and start < self.end


@dataclass
class SubstitutionResult:
    """Rewritten source plus what was applied and what went wrong."""

    source: str
    applied: list[Translatable] = field(default_factory=list)
    warnings: list[SubstitutionWarning] = field(default_factory=list)

    def count(self, kind: WarningKind) -> int:
        return sum(1 for warning in self.warnings if warning.kind == kind)


def _escape_quotes(value: str) -> str:
    return value.replace('"', '\\"')


def replacement_for(translatable: Translatable, lookup: LookupStyle = DEFAULT_LOOKUP) -> str:
    """Text that takes the place of a located region."""
    if translatable.type == TranslatableType.ERB:
        if translatable.decorated:
            return lookup.interpolated(translatable.prefix, translatable.key, translatable.suffix)
        return lookup.call(translatable.key)
    return f"{translatable.prefix}{lookup.output_tag(translatable.key)}{translatable.suffix}"


def locate(source: str, translatable: Translatable) -> list[tuple[int, int]]:
    """Find every region of ``source`` the record's replacement could go in.

    ERB regions are whole quoted literals (quotes included) inside an ERB tag
    whose content equals ``original``. HTML regions are text node contents equal
    to ``original``; for undecorated records only the phrase itself, with
    whitespace, commas and colons tolerated around it in the node.
    """
    regions: list[tuple[int, int]] = []

    if translatable.type == TranslatableType.ERB:
        for tag in ERB_TAG_RE.finditer(source):
            base = tag.start(1)
            for literal in QUOTED_LITERAL_RE.finditer(tag.group(1)):
                if literal.group(2) == translatable.original:
                    regions.append((base + literal.start(), base + literal.end()))
        return regions

    phrase = re.compile(f"{NODE_PADDING}({re.escape(translatable.original)}){NODE_PADDING}")
    for node in TEXT_NODE_RE.finditer(source):
        content = node.group(1)
        if translatable.decorated:
            if content == translatable.original:
                regions.append((node.start(1), node.end(1)))
            continue
        match = phrase.fullmatch(content)
        if match:
            regions.append((node.start(1) + match.start(1), node.start(1) + match.end(1)))
    return regions


def _pinned_region(source: str, translatable: Translatable) -> tuple[int, int] | None:
    """Region from the offsets recorded at scan time, if they still hold."""
    span = translatable.span
    if span is None:
        return None
    start, end = span
    if source[start:end] != translatable.original:
        return None
    if translatable.type == TranslatableType.HTML:
        return start, end
    if start == 0 or end >= len(source):
        return None
    quote = source[start - 1]
    if quote not in QUOTES or source[end] != quote:
        return None
    return start - 1, end + 1


def _ambiguous(translatable: Translatable, occurrences: int) -> SubstitutionWarning:
    return SubstitutionWarning(
        kind=WarningKind.AMBIGUOUS,
        key=translatable.key,
        message=f"'{translatable.original}' matches {occurrences} places; replacing the first",
        occurrences=occurrences,
    )


def _unmatched(translatable: Translatable) -> SubstitutionWarning:
    return SubstitutionWarning(
        kind=WarningKind.UNMATCHED,
        key=translatable.key,
        message=f"'{translatable.original}' not found; left untouched",
    )


def find_key_collisions(translatables: Iterable[Translatable]) -> list[SubstitutionWarning]:
    """Report keys derived from more than one distinct text."""
    texts_by_key: dict[str, list[str]] = defaultdict(list)
    for translatable in translatables:
        texts = texts_by_key[translatable.key]
        if translatable.text not in texts:
            texts.append(translatable.text)

    return [
        SubstitutionWarning(
            kind=WarningKind.KEY_COLLISION,
            key=key,
            message=f"Key '{key}' derived from {len(texts)} different texts: "
            + ", ".join(repr(text) for text in texts),
            occurrences=len(texts),
        )
        for key, texts in texts_by_key.items()
        if len(texts) > 1
    ]


def replace_key(
    source: str, translatable: Translatable, *, lookup: LookupStyle = DEFAULT_LOOKUP
) -> SubstitutionResult:
    """Replace the leftmost context matching ``translatable`` in ``source``."""
    regions = locate(source, translatable)
    if not regions:
        return SubstitutionResult(source, warnings=[_unmatched(translatable)])

    warnings = [_ambiguous(translatable, len(regions))] if len(regions) > 1 else []
    start, end = regions[0]
    rewritten = source[:start] + replacement_for(translatable, lookup) + source[end:]
    return SubstitutionResult(rewritten, applied=[translatable], warnings=warnings)


def plan_edits(
    source: str,
    translatables: Iterable[Translatable],
    *,
    lookup: LookupStyle = DEFAULT_LOOKUP,
) -> tuple[list[Edit], list[SubstitutionWarning]]:
    """Compute non-overlapping edits against the untouched source.

    Records keep the region they were scanned from when their offsets still
    match. Otherwise the first matching region not yet claimed is used.
    Returned edits are sorted by position.
    """
    edits: list[Edit] = []
    warnings: list[SubstitutionWarning] = []

    for translatable in translatables:
        region = _pinned_region(source, translatable)
        if region is None:
            regions = locate(source, translatable)
            if not regions:
                warnings.append(_unmatched(translatable))
                continue
            if len(regions) > 1:
                warnings.append(_ambiguous(translatable, len(regions)))
            free = [r for r in regions if not any(e.overlaps(*r) for e in edits)]
            region = free[0] if free else regions[0]

        start, end = region
        clash = next((e for e in edits if e.overlaps(start, end)), None)
        if clash is not None:
            warnings.append(
                SubstitutionWarning(
                    kind=WarningKind.OVERLAP,
                    key=translatable.key,
                    message=f"'{translatable.original}' overlaps the replacement for "
                    f"'{clash.translatable.original}'; skipped",
                )
            )
            continue
        edits.append(Edit(start, end, replacement_for(translatable, lookup), translatable))

    edits.sort(key=lambda edit: edit.start)
    return edits, warnings


def apply_edits(source: str, edits: list[Edit]) -> str:
    """Apply position-sorted, non-overlapping edits in a single pass."""
    pieces: list[str] = []
    cursor = 0
    for edit in edits:
        pieces.append(source[cursor : edit.start])
        pieces.append(edit.replacement)
        cursor = edit.end
    pieces.append(source[cursor:])
    return "".join(pieces)


def replace_keys(
    source: str,
    translatables: Iterable[Translatable],
    *,
    lookup: LookupStyle = DEFAULT_LOOKUP,
    strategy: SubstitutionStrategy | str = SubstitutionStrategy.PLANNED,
) -> SubstitutionResult:
    """Replace every record's fragment in ``source`` with its lookup call.

    Examples:
        replace_keys('<%= f.button "A text" %>', [from_original("A text", "erb")])
            .source == '<%= f.button t(".a_text") %>'
    """
    records = list(translatables)
    warnings = find_key_collisions(records)

    if SubstitutionStrategy(strategy) == SubstitutionStrategy.SEQUENTIAL:
        rewritten = source
        applied: list[Translatable] = []
        for translatable in records:
            step = replace_key(rewritten, translatable, lookup=lookup)
            rewritten = step.source
            applied.extend(step.applied)
            warnings.extend(step.warnings)
    else:
        edits, plan_warnings = plan_edits(source, records, lookup=lookup)
        rewritten = apply_edits(source, edits)
        planned = {id(edit.translatable) for edit in edits}
        applied = [t for t in records if id(t) in planned]
        warnings.extend(plan_warnings)

    for warning in warnings:
        log.warning(
            "Substitution hazard",
            kind=str(warning.kind),
            key=warning.key,
            detail=warning.message,
        )
    log.debug(
        "Replaced keys",
        strategy=str(strategy),
        records=len(records),
        applied=len(applied),
        warnings=len(warnings),
    )

    return SubstitutionResult(rewritten, applied=applied, warnings=warnings)
