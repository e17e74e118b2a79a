"""Rule tables separating translatable prose from markup and code noise.

Two kinds of rule live in a :class:`RuleSet`:

- ``exclude`` rules reject an HTML text node when they match anywhere in it.
- ``suppress`` rules are applied in order to a whole template before ERB
  scanning; every match is deleted so the quoted literals it contained are
  never proposed.

Rule sets are immutable values. Pass one explicitly to the classifier and
scanners, or use :data:`DEFAULT_RULESET`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import StrEnum

from glossa.errors import RuleSetError


class RuleMode(StrEnum):
    """How a rule is used."""

    EXCLUDE = "exclude"  # Reject an HTML candidate
    SUPPRESS = "suppress"  # Delete from the template before ERB scanning


@dataclass(frozen=True)
class Rule:
    """A named pattern and the way it is applied."""

    name: str
    pattern: re.Pattern[str]
    mode: RuleMode
    description: str = ""

    def matches(self, text: str) -> bool:
        return self.pattern.search(text) is not None


def exclude(name: str, pattern: str, description: str, flags: int = 0) -> Rule:
    return Rule(name, re.compile(pattern, flags), RuleMode.EXCLUDE, description)


def suppress(name: str, pattern: str, description: str, flags: int = 0) -> Rule:
    return Rule(name, re.compile(pattern, flags), RuleMode.SUPPRESS, description)


@dataclass(frozen=True)
class RuleSet:
    """Versioned, ordered collection of exclusion and suppression rules."""

    version: str
    exclusions: tuple[Rule, ...] = field(default_factory=tuple)
    suppressions: tuple[Rule, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        for rule in self.exclusions:
            if rule.mode is not RuleMode.EXCLUDE:
                raise RuleSetError(
                    f"Rule {rule.name} is not an exclusion rule",
                    details={"rule": rule.name, "mode": str(rule.mode)},
                )
        for rule in self.suppressions:
            if rule.mode is not RuleMode.SUPPRESS:
                raise RuleSetError(
                    f"Rule {rule.name} is not a suppression rule",
                    details={"rule": rule.name, "mode": str(rule.mode)},
                )
        names = [rule.name for rule in self.rules]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise RuleSetError(
                f"Duplicate rule names: {', '.join(duplicates)}",
                details={"duplicates": duplicates},
            )

    @property
    def rules(self) -> tuple[Rule, ...]:
        return self.exclusions + self.suppressions

    def get(self, name: str) -> Rule:
        for rule in self.rules:
            if rule.name == name:
                return rule
        raise RuleSetError(f"Unknown rule: {name}", details={"rule": name})

    def extend(self, *rules: Rule, version: str | None = None) -> RuleSet:
        """Return a new rule set with ``rules`` appended to their mode's list."""
        exclusions = self.exclusions + tuple(r for r in rules if r.mode is RuleMode.EXCLUDE)
        suppressions = self.suppressions + tuple(r for r in rules if r.mode is RuleMode.SUPPRESS)
        return RuleSet(
            version=version or f"{self.version}+{len(rules)}",
            exclusions=exclusions,
            suppressions=suppressions,
        )


# =============================================================================
# HTML text node exclusions (any match rejects)
# =============================================================================

HTML_EXCLUSIONS: tuple[Rule, ...] = (
    exclude("blank", r"^\s*$", "Empty or whitespace only"),
    exclude("html_entity", r"&\w{4,5};", "Character entity reference"),
    exclude("attribute", r'\s*[\w-]*\s*=\s*"*(.*?)"*', "Attribute assignment (name=\"value\")"),
    exclude(
        "punctuation",
        r"^\s*[\?\:\,\!\"\-\#\-\.\(\)\_\/\|\+\=\[\]\@\s]+\s*$",
        "Punctuation and connector symbols only",
    ),
    exclude("path", r'\w*\s*=*\s*"*\/[\w.<>%=\/]+\/*"*', "Path or URL-like token"),
    exclude("params", r"params\[\:\w+\]", "params[:name] reference"),
    exclude("integer", r"^\+?\d+\s*$", "Pure integer"),
    exclude("percent", r"^\s*\d\d%\s*$", "Two-digit percentage"),
    exclude(
        "currency",
        r"^\s*?\$?\s*[0-9]{1,3}(?:,?[0-9]{3})*(?:\.[0-9]{2})?\s*$",
        "Amount with optional $, thousands separators and cents",
    ),
    exclude("dollar", r"^\s*\$\s*$", "Lone dollar sign"),
    exclude("null", r"^\s*null\s*$", "The word null", re.IGNORECASE),
    exclude("possessive", r"^\s*'s\s*$", "Lone possessive 's", re.IGNORECASE),
    exclude("erb_fragment", r"\s*<%(.*?)%>\s*", "Residual ERB tag"),
)

# =============================================================================
# ERB noise suppression (applied in order, matches deleted)
# =============================================================================

_ATTRIBUTE_NAMES = "class|id|controller|action|novalidate|equalTo|target|disabled"
_ATTRIBUTE_VALUE = r"[\"'(][#().&!='?:\w\s-]*(#\{.*\})*[#().&!='?:\w\s-]*[\"')]"

ERB_SUPPRESSIONS: tuple[Rule, ...] = (
    suppress(
        "render_partial",
        r"render\s+[\"'][#\w\s.]+[\"']",
        "render 'partial/name'",
        re.DOTALL | re.MULTILINE,
    ),
    suppress(
        "bound_class",
        r"class\s*=\s*[\"']<%(.*?)%>[\"']",
        "class attribute bound to an ERB expression",
        re.DOTALL | re.MULTILINE,
    ),
    suppress(
        "keyword_argument",
        rf"({_ATTRIBUTE_NAMES}):\s*{_ATTRIBUTE_VALUE}",
        "class: 'value' style helper argument",
    ),
    suppress(
        "hash_rocket_argument",
        rf":({_ATTRIBUTE_NAMES})\s*=>\s*{_ATTRIBUTE_VALUE}",
        ":class => 'value' style helper argument",
    ),
    suppress("empty_string", r'""', "Empty string literal"),
    suppress("absolute_path", r"[\"']\/[\w\/#.@\{\}]+[\"']", "Quoted path with leading slash"),
    suppress(
        "relative_path",
        r"[\"'][\w\/#.@\{\}]+\/[\w\/#.@\{\}]+[\"']",
        "Quoted literal with an internal slash",
    ),
    suppress("query_double", r'(where|order)\(".*"\)', "where(\"...\") / order(\"...\")"),
    suppress("query_single", r"(where|order)\('.*'\)", "where('...') / order('...')"),
    suppress("identifier", r'".*(\w_)+.*"', "Quoted literal containing snake_case words"),
    suppress("symbols", r'"[#@!\.\#]+"', "Quoted literal made of symbols only"),
)

DEFAULT_RULESET = RuleSet(
    version="1",
    exclusions=HTML_EXCLUSIONS,
    suppressions=ERB_SUPPRESSIONS,
)
