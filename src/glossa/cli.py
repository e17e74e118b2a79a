"""CLI for Glossa - pull hardcoded text out of ERB templates."""

import json
import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from glossa.config import settings
from glossa.errors import GlossaError
from glossa.extraction.classifier import rejecting_rule
from glossa.extraction.rules import DEFAULT_RULESET
from glossa.extraction.substitution import SubstitutionStrategy
from glossa.pipeline import collect_templates, parse_template, process_file, read_template

# Terminal palette
ELECTRIC_PURPLE = "#e135ff"
NEON_CYAN = "#80ffea"
CORAL = "#ff6ac1"
ELECTRIC_YELLOW = "#f1fa8c"
SUCCESS_GREEN = "#50fa7b"
ERROR_RED = "#ff6363"

console = Console()
app = typer.Typer(
    name="glossa",
    help="Glossa - extract translatable text from ERB templates",
    add_completion=False,
    no_args_is_help=True,
)

PathsArgument = Annotated[
    list[Path], typer.Argument(help="Template files or directories to search")
]


def success(message: str) -> None:
    """Print a success message."""
    console.print(f"[{SUCCESS_GREEN}]✓[/{SUCCESS_GREEN}] {message}")


def error(message: str) -> None:
    """Print an error message."""
    console.print(f"[{ERROR_RED}]✗[/{ERROR_RED}] {message}")


def warn(message: str) -> None:
    """Print a warning message."""
    console.print(f"[{ELECTRIC_YELLOW}]![/{ELECTRIC_YELLOW}] {message}")


def info(message: str) -> None:
    """Print an info message."""
    console.print(f"[{NEON_CYAN}]→[/{NEON_CYAN}] {message}")


@app.callback()
def main() -> None:
    """Configure stdlib logging for structlog output."""
    logging.basicConfig(level=settings.log_level, format="%(message)s", force=True)


@app.command()
def scan(
    paths: PathsArgument,
    as_json: bool = typer.Option(False, "--json", help="Print records as JSON"),
) -> None:
    """List the translatable fragments found in templates, without changing them."""
    templates = collect_templates(paths, settings.template_suffix)
    if not templates:
        error("No templates found")
        raise typer.Exit(1)

    if as_json:
        payload = {
            str(path): [t.to_dict() for t in parse_template(read_template(path))]
            for path in templates
        }
        print(json.dumps(payload, indent=2, ensure_ascii=False))
        return

    total = 0
    for path in templates:
        records = parse_template(read_template(path))
        total += len(records)
        if not records:
            continue
        table = Table(title=str(path), border_style=NEON_CYAN)
        table.add_column("Type", style=ELECTRIC_PURPLE)
        table.add_column("Key", style=NEON_CYAN)
        table.add_column("Text")
        table.add_column("Prefix", style=CORAL)
        table.add_column("Suffix", style=CORAL)
        for record in records:
            table.add_row(
                str(record.type),
                record.key,
                escape(record.text),
                escape(repr(record.prefix)),
                escape(repr(record.suffix)),
            )
        console.print(table)

    info(f"{total} fragments in {len(templates)} templates")


@app.command()
def rewrite(
    paths: PathsArgument,
    dry_run: bool = typer.Option(False, "--dry-run", "-n", help="Report without writing files"),
    strategy: SubstitutionStrategy | None = typer.Option(
        None, "--strategy", "-s", help="planned or sequential (default from settings)"
    ),
    locales: list[str] | None = typer.Option(
        None, "--locale", "-l", help="Extra locale to seed (repeatable)"
    ),
    strict: bool = typer.Option(False, "--strict", help="Exit 1 if any substitution hazard"),
) -> None:
    """Replace fragments with t(".key") lookups and write locale files.

    Examples:
        glossa rewrite app/views                 # Rewrite every template
        glossa rewrite app/views -n              # Preview only
        glossa rewrite app/views -l pt-BR -l es  # Seed extra locales
    """
    update: dict[str, object] = {}
    if strategy is not None:
        update["substitution_strategy"] = str(strategy)
    if locales:
        update["extra_locales"] = [loc for loc in locales if loc != settings.default_locale]
    config = settings.model_copy(update=update)

    templates = collect_templates(paths, config.template_suffix)
    if not templates:
        error("No templates found")
        raise typer.Exit(1)

    hazards = 0
    fragments = 0
    for path in templates:
        try:
            report = process_file(path, config=config, dry_run=dry_run)
        except GlossaError as e:
            error(escape(f"{path}: {e.message}"))
            hazards += 1
            continue
        result = report.result
        fragments += len(result.translatables)
        hazards += len(result.warnings)

        if result.translatables:
            verb = "would rewrite" if dry_run else "rewrote"
            success(f"{escape(str(path))}: {verb} {len(result.translatables)} fragments")
        for locale_file in report.locale_files:
            info(f"wrote {escape(str(locale_file))}")
        for warning in result.warnings:
            warn(escape(f"{path}: [{warning.kind}] {warning.message}"))

    info(f"{fragments} fragments, {hazards} warnings in {len(templates)} templates")
    if strict and hazards:
        error("Substitution hazards found (--strict)")
        raise typer.Exit(1)


@app.command()
def check(text: str = typer.Argument(help="Text node content to classify")) -> None:
    """Show whether a text node would be extracted, and which rule rejects it."""
    rule = rejecting_rule(text)
    if rule is None:
        success(escape(f"translatable: {text!r}"))
        return
    warn(f"rejected by [bold]{rule.name}[/bold]: {escape(rule.description)}")


@app.command()
def rules() -> None:
    """List the active classification rules."""
    table = Table(title=f"Rule set v{DEFAULT_RULESET.version}", border_style=NEON_CYAN)
    table.add_column("Mode", style=ELECTRIC_PURPLE)
    table.add_column("Name", style=NEON_CYAN)
    table.add_column("Description")
    table.add_column("Pattern", style=CORAL, overflow="fold")
    for rule in DEFAULT_RULESET.rules:
        table.add_row(
            str(rule.mode), rule.name, escape(rule.description), escape(rule.pattern.pattern)
        )
    console.print(table)


if __name__ == "__main__":
    app()
