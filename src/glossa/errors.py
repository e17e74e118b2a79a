"""Custom exceptions for Glossa."""


class GlossaError(Exception):
    """Base exception for all Glossa errors."""

    def __init__(self, message: str, *, details: dict[str, object] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class RuleSetError(GlossaError):
    """Raised when a rule set lookup or extension is invalid."""


class TemplatePathError(GlossaError):
    """Raised when a template does not live under the configured views root."""

    def __init__(self, template: str, views_root: str) -> None:
        super().__init__(
            f"Template {template} is not under views root {views_root}",
            details={"template": template, "views_root": views_root},
        )


class LocaleWriteError(GlossaError):
    """Raised when a locale file cannot be written."""
