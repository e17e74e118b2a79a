"""Build Translatable records from candidate spans."""

from __future__ import annotations

import structlog

from glossa.extraction.decomposer import decompose
from glossa.extraction.keys import derive_key
from glossa.models import Candidate, Translatable, TranslatableType

log = structlog.get_logger()


def from_original(
    original: str,
    type: TranslatableType | str = TranslatableType.HTML,  # noqa: A002
    *,
    start: int | None = None,
    end: int | None = None,
) -> Translatable:
    """Extract prefix, text, suffix and key from a raw span.

    Examples:
        from_original(" simple text: ") ->
            Translatable(original=" simple text: ", text="simple text",
                         key="simple_text", prefix=" ", suffix=": ", type="html")
    """
    prefix, text, suffix = decompose(original)
    return Translatable(
        original=original,
        text=text,
        key=derive_key(text),
        prefix=prefix,
        suffix=suffix,
        type=TranslatableType(type),
        start=start,
        end=end,
    )


def build(candidate: Candidate) -> Translatable:
    return from_original(candidate.text, candidate.type, start=candidate.start, end=candidate.end)


def build_all(candidates: list[Candidate]) -> list[Translatable]:
    """Records for every candidate that leaves a key once decoration is removed.

    Candidates made only of decoration (a lone ``*`` marker, a blank literal)
    would all map to the empty key and are dropped.
    """
    records: list[Translatable] = []
    for candidate in candidates:
        record = build(candidate)
        if not record.key:
            log.debug("Candidate has no translatable core", text=candidate.text)
            continue
        records.append(record)
    return records
