"""Decide which candidate spans are translatable prose."""

from __future__ import annotations

from typing import TYPE_CHECKING

from glossa.extraction.rules import DEFAULT_RULESET

if TYPE_CHECKING:
    from glossa.extraction.rules import Rule, RuleSet


def rejecting_rule(span: str, ruleset: RuleSet = DEFAULT_RULESET) -> Rule | None:
    """Return the first exclusion rule matching ``span``, or None if it is prose."""
    for rule in ruleset.exclusions:
        if rule.matches(span):
            return rule
    return None


def is_translatable(span: str, ruleset: RuleSet = DEFAULT_RULESET) -> bool:
    """Accept an HTML text node unless any exclusion rule matches it."""
    return rejecting_rule(span, ruleset) is None


def suppress_noise_with_offsets(
    source: str, ruleset: RuleSet = DEFAULT_RULESET
) -> tuple[str, list[int]]:
    """Delete every suppression match, tracking where surviving characters came from.

    Rules run in order, each against the previous rule's output. Returns the
    suppressed text plus, for each of its characters, the offset of that
    character in ``source``.
    """
    text = source
    offsets = list(range(len(source)))

    for rule in ruleset.suppressions:
        pieces: list[str] = []
        kept: list[int] = []
        last = 0
        for match in rule.pattern.finditer(text):
            pieces.append(text[last : match.start()])
            kept.extend(offsets[last : match.start()])
            last = match.end()
        if not pieces:
            continue
        pieces.append(text[last:])
        kept.extend(offsets[last:])
        text = "".join(pieces)
        offsets = kept

    return text, offsets


def suppress_noise(source: str, ruleset: RuleSet = DEFAULT_RULESET) -> str:
    """Remove partial renders, bound attributes, paths and other ERB noise."""
    text, _ = suppress_noise_with_offsets(source, ruleset)
    return text
