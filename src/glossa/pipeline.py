"""Template processing pipeline - scan, build, rewrite, write locales.

Orchestrates the flow for one template:
1. Scan ERB literals (after noise suppression), then HTML text nodes
2. Build a Translatable record per accepted candidate
3. Replace each record's fragment with a lookup call
4. Write the locale files for the applied records, then the rewritten template
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from glossa.config import settings as default_settings
from glossa.extraction.builder import build_all
from glossa.extraction.rules import DEFAULT_RULESET
from glossa.extraction.scanner import scan_erb, scan_html
from glossa.extraction.substitution import (
    DEFAULT_LOOKUP,
    LookupStyle,
    SubstitutionStrategy,
    replace_keys,
)
from glossa.locales import write_locales
from glossa.models import TranslatableType

if TYPE_CHECKING:
    from collections.abc import Iterable

    from glossa.config import Settings
    from glossa.extraction.rules import RuleSet
    from glossa.models import SubstitutionWarning, Translatable

log = structlog.get_logger()


@dataclass
class ExtractionResult:
    """Outcome of processing one template buffer."""

    source: str
    rewritten: str
    translatables: list[Translatable] = field(default_factory=list)
    applied: list[Translatable] = field(default_factory=list)
    warnings: list[SubstitutionWarning] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return self.rewritten != self.source

    @property
    def erb_count(self) -> int:
        return sum(1 for t in self.translatables if t.type == TranslatableType.ERB)

    @property
    def html_count(self) -> int:
        return sum(1 for t in self.translatables if t.type == TranslatableType.HTML)


@dataclass
class FileReport:
    """Outcome of processing one template file."""

    path: Path
    result: ExtractionResult
    written: bool = False
    locale_files: list[Path] = field(default_factory=list)


def parse_erb(source: str, ruleset: RuleSet = DEFAULT_RULESET) -> list[Translatable]:
    """Records for quoted literals inside ERB tags.

    Examples:
        parse_erb('<%= title "A page title" %>') ->
            [Translatable(original="A page title", text="A page title",
                          key="a_page_title", type="erb")]
    """
    return build_all(scan_erb(source, ruleset))


def parse_html(source: str, ruleset: RuleSet = DEFAULT_RULESET) -> list[Translatable]:
    """Records for translatable HTML text nodes.

    Examples:
        parse_html("<a>Show page</a>") ->
            [Translatable(original="Show page", text="Show page", key="show_page", type="html")]
    """
    return build_all(scan_html(source, ruleset))


def parse_template(source: str, ruleset: RuleSet = DEFAULT_RULESET) -> list[Translatable]:
    """ERB records followed by HTML records, each in source order."""
    return parse_erb(source, ruleset) + parse_html(source, ruleset)


def lookup_style(config: Settings) -> LookupStyle:
    return LookupStyle(function=config.lookup_function, relative=config.relative_keys)


def process_source(
    source: str,
    *,
    ruleset: RuleSet = DEFAULT_RULESET,
    lookup: LookupStyle = DEFAULT_LOOKUP,
    strategy: SubstitutionStrategy | str = SubstitutionStrategy.PLANNED,
) -> ExtractionResult:
    """Extract records from ``source`` and rewrite it with lookup calls."""
    translatables = parse_template(source, ruleset)
    if not translatables:
        return ExtractionResult(source=source, rewritten=source)

    substitution = replace_keys(source, translatables, lookup=lookup, strategy=strategy)
    return ExtractionResult(
        source=source,
        rewritten=substitution.source,
        translatables=translatables,
        applied=substitution.applied,
        warnings=substitution.warnings,
    )


def collect_templates(paths: Iterable[Path], template_suffix: str = ".html.erb") -> list[Path]:
    """Expand directories into the templates below them, sorted."""
    templates: set[Path] = set()
    for path in paths:
        if path.is_dir():
            templates.update(
                p for p in path.rglob(f"*{template_suffix}") if p.is_file()
            )
        elif path.is_file():
            templates.add(path)
        else:
            log.warning("Path does not exist", path=str(path))
    return sorted(templates)


def read_template(path: Path) -> str:
    # newline="" keeps CRLF files byte-identical on write back
    with path.open(encoding="utf-8", newline="") as f:
        return f.read()


def process_file(
    path: Path,
    *,
    config: Settings | None = None,
    ruleset: RuleSet = DEFAULT_RULESET,
    dry_run: bool = False,
) -> FileReport:
    """Write a template's locale files, then rewrite it in place.

    Only records that were actually substituted reach the locale files.
    Locale paths are resolved before anything is written, so a template
    outside the views root raises TemplatePathError and stays untouched.

    Args:
        path: Template to process
        config: Settings to use (default: global settings)
        ruleset: Classification rules
        dry_run: Compute everything but write nothing

    Returns:
        FileReport with the extraction result and files written
    """
    config = config or default_settings
    result = process_source(
        read_template(path),
        ruleset=ruleset,
        lookup=lookup_style(config),
        strategy=config.substitution_strategy,
    )
    report = FileReport(path=path, result=result)

    log.info(
        "Processed template",
        path=str(path),
        erb=result.erb_count,
        html=result.html_count,
        applied=len(result.applied),
        warnings=len(result.warnings),
        dry_run=dry_run,
    )

    if dry_run or not result.applied:
        return report

    # Locale files before the template
    report.locale_files = write_locales(
        result.applied,
        path,
        views_root=config.views_root,
        locales_root=config.locales_root,
        locales=config.locales,
        template_suffix=config.template_suffix,
    )

    if result.changed:
        with path.open("w", encoding="utf-8", newline="") as f:
            f.write(result.rewritten)
        report.written = True

    return report
