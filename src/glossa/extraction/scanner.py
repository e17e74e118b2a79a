"""Find raw candidate spans in ERB templates.

Two scanners:
- ERB: quoted literals inside ``<% ... %>`` after noise suppression
- HTML: text nodes between ``>`` and the next ``<`` accepted by the classifier

Both return candidates left to right, with offsets into the untouched source.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

import structlog

from glossa.extraction.classifier import rejecting_rule, suppress_noise_with_offsets
from glossa.extraction.rules import DEFAULT_RULESET
from glossa.models import Candidate, TranslatableType

if TYPE_CHECKING:
    from glossa.extraction.rules import RuleSet

log = structlog.get_logger()

ERB_TAG_RE = re.compile(r"<%(.*?)%>", re.DOTALL)
QUOTED_LITERAL_RE = re.compile(r"([\"'])(.*?)\1", re.DOTALL)
TEXT_NODE_RE = re.compile(r">([^<>]+)<")


def _original_span(offsets: list[int], open_quote: int, close_quote: int) -> tuple[int, int] | None:
    """Map a literal's inner span back to the source, if it survived in one piece.

    ``open_quote``/``close_quote`` index the quote characters in the suppressed
    text. The literal is contiguous in the source when its quotes are exactly as
    far apart there as in the suppressed text.
    """
    start, end = offsets[open_quote], offsets[close_quote]
    if end - start != close_quote - open_quote:
        return None
    return start + 1, end


def scan_erb(source: str, ruleset: RuleSet = DEFAULT_RULESET) -> list[Candidate]:
    """Yield the content of every quoted literal inside an ERB tag.

    Suppression rules run over the whole source first. Literals that survive
    are accepted without further classification.
    """
    suppressed, offsets = suppress_noise_with_offsets(source, ruleset)
    candidates: list[Candidate] = []

    for tag in ERB_TAG_RE.finditer(suppressed):
        base = tag.start(1)
        for literal in QUOTED_LITERAL_RE.finditer(tag.group(1)):
            content = literal.group(2)
            if not content:
                continue
            span = _original_span(offsets, base + literal.start(), base + literal.end() - 1)
            if span is None:
                log.debug("Literal split by noise suppression", text=content)
                candidates.append(Candidate(content, TranslatableType.ERB))
            else:
                candidates.append(Candidate(content, TranslatableType.ERB, *span))

    return candidates


def scan_html(source: str, ruleset: RuleSet = DEFAULT_RULESET) -> list[Candidate]:
    """Yield every text node the classifier accepts."""
    candidates: list[Candidate] = []

    for node in TEXT_NODE_RE.finditer(source):
        content = node.group(1)
        rule = rejecting_rule(content, ruleset)
        if rule is not None:
            log.debug("Text node rejected", rule=rule.name, text=content)
            continue
        candidates.append(Candidate(content, TranslatableType.HTML, node.start(1), node.end(1)))

    return candidates
