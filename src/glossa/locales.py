"""Locale YAML generation for extracted fragments.

A template at ``app/views/users/admin/_form.html.erb`` gets its phrases written
to ``config/locales/views/users/admin/_form.<locale>.yml`` under the
``<locale>.users.admin.form`` namespace, which is where Rails resolves the lazy
``t(".key")`` lookups inserted into that template.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

import structlog
import yaml

from glossa.errors import LocaleWriteError, TemplatePathError
from glossa.extraction.decomposer import unescape

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from glossa.models import Translatable

log = structlog.get_logger()


def template_namespace(
    template: Path, views_root: Path, template_suffix: str = ".html.erb"
) -> tuple[list[str], str]:
    """Split a template path into its directories and file stem under ``views_root``.

    Returns:
        (["users", "admin"], "_form") for app/views/users/admin/_form.html.erb
    """
    try:
        relative = template.resolve().relative_to(views_root.resolve())
    except ValueError as e:
        raise TemplatePathError(str(template), str(views_root)) from e

    name = relative.name
    stem = name[: -len(template_suffix)] if name.endswith(template_suffix) else relative.stem
    return list(relative.parent.parts), stem


def locale_document(
    translatables: Iterable[Translatable], locale: str, namespace: Sequence[str]
) -> dict[str, Any]:
    """Nest ``key: text`` pairs under ``locale`` and the namespace parts.

    The first text seen for a key wins.
    """
    entries: dict[str, str] = {}
    for translatable in translatables:
        entries.setdefault(translatable.key, unescape(translatable.text))

    document: dict[str, Any] = entries
    for part in reversed(namespace):
        document = {part: document}
    return {locale: document}


def locale_path(
    template: Path,
    locale: str,
    *,
    views_root: Path,
    locales_root: Path,
    template_suffix: str = ".html.erb",
) -> Path:
    dirs, stem = template_namespace(template, views_root, template_suffix)
    return locales_root.joinpath(*dirs) / f"{stem}.{locale}.yml"


def write_locales(
    translatables: Sequence[Translatable],
    template: Path,
    *,
    views_root: Path,
    locales_root: Path,
    locales: Sequence[str],
    template_suffix: str = ".html.erb",
) -> list[Path]:
    """Write one locale file per locale for a template's fragments.

    Every locale receives the extracted text; translators replace it later.
    Nothing is written for a template without fragments.

    Returns:
        Paths of the files written
    """
    if not translatables:
        log.debug("No fragments, skipping locale files", template=str(template))
        return []

    dirs, stem = template_namespace(template, views_root, template_suffix)
    namespace = [*dirs, stem.lstrip("_")]
    written: list[Path] = []

    for locale in locales:
        path = locale_path(
            template,
            locale,
            views_root=views_root,
            locales_root=locales_root,
            template_suffix=template_suffix,
        )
        document = locale_document(translatables, locale, namespace)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("w", encoding="utf-8") as f:
                yaml.safe_dump(
                    document, f, allow_unicode=True, default_flow_style=False, sort_keys=False
                )
        except OSError as e:
            raise LocaleWriteError(
                f"Failed to write locale file {path}: {e}",
                details={"path": str(path), "locale": locale},
            ) from e

        log.info("Wrote locale file", path=str(path), locale=locale, keys=len(translatables))
        written.append(path)

    return written
