"""Configuration management for Glossa."""

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="GLOSSA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level",
    )

    # Project layout (Rails conventions)
    views_root: Path = Field(
        default=Path("app/views"),
        description="Directory templates live under; locale namespaces are relative to it",
    )
    locales_root: Path = Field(
        default=Path("config/locales/views"),
        description="Directory locale YAML files are written under",
    )
    template_suffix: str = Field(
        default=".html.erb",
        description="File suffix identifying templates to process",
    )

    # Locales
    default_locale: str = Field(default="en", description="Locale the extracted text belongs to")
    extra_locales: list[str] = Field(
        default_factory=list,
        description="Additional locales seeded with the extracted text (e.g. ['pt-BR'])",
    )

    # Rewriting
    lookup_function: str = Field(default="t", description="Helper called for each lookup")
    relative_keys: bool = Field(
        default=True,
        description="Emit lazy lookups (t('.key')) scoped to the template",
    )
    substitution_strategy: Literal["planned", "sequential"] = Field(
        default="planned",
        description="planned: edits computed against the untouched source; "
        "sequential: each replacement applied to the previous output",
    )

    @field_validator("template_suffix")
    @classmethod
    def validate_template_suffix(cls, value: str) -> str:
        if not value.startswith("."):
            raise ValueError("template_suffix must start with '.'")
        return value

    @model_validator(mode="after")
    def validate_locales(self) -> "Settings":
        """Reject empty locale names and a default locale repeated in the extras."""
        if not self.default_locale.strip():
            raise ValueError("default_locale must not be empty")
        if any(not locale.strip() for locale in self.extra_locales):
            raise ValueError("extra_locales must not contain empty names")
        if self.default_locale in self.extra_locales:
            raise ValueError(
                f"default_locale '{self.default_locale}' must not be repeated in extra_locales"
            )
        return self

    @property
    def locales(self) -> list[str]:
        """Default locale followed by the extra locales."""
        return [self.default_locale, *self.extra_locales]


# Global settings instance
settings = Settings()
