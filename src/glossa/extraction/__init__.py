"""Glossa extraction engine.

This module provides:
- Rule tables separating prose from markup/code noise
- ERB literal and HTML text node scanners
- Prefix/text/suffix decomposition and key derivation
- Substitution of fragments with I18n lookup calls

Usage:
    from glossa.extraction import scan_erb, build_all, replace_keys

    records = build_all(scan_erb(source))
    result = replace_keys(source, records)
"""

from glossa.extraction.builder import build, build_all, from_original
from glossa.extraction.classifier import (
    is_translatable,
    rejecting_rule,
    suppress_noise,
    suppress_noise_with_offsets,
)
from glossa.extraction.decomposer import decompose, escape, unescape
from glossa.extraction.keys import derive_key
from glossa.extraction.rules import (
    DEFAULT_RULESET,
    ERB_SUPPRESSIONS,
    HTML_EXCLUSIONS,
    Rule,
    RuleMode,
    RuleSet,
)
from glossa.extraction.scanner import scan_erb, scan_html
from glossa.extraction.substitution import (
    DEFAULT_LOOKUP,
    Edit,
    LookupStyle,
    SubstitutionResult,
    SubstitutionStrategy,
    apply_edits,
    find_key_collisions,
    locate,
    plan_edits,
    replace_key,
    replace_keys,
    replacement_for,
)

__all__ = [
    # Rules
    "DEFAULT_RULESET",
    "ERB_SUPPRESSIONS",
    "HTML_EXCLUSIONS",
    "Rule",
    "RuleMode",
    "RuleSet",
    # Classifier
    "is_translatable",
    "rejecting_rule",
    "suppress_noise",
    "suppress_noise_with_offsets",
    # Scanners
    "scan_erb",
    "scan_html",
    # Builder
    "build",
    "build_all",
    "decompose",
    "derive_key",
    "escape",
    "from_original",
    "unescape",
    # Substitution
    "DEFAULT_LOOKUP",
    "Edit",
    "LookupStyle",
    "SubstitutionResult",
    "SubstitutionStrategy",
    "apply_edits",
    "find_key_collisions",
    "locate",
    "plan_edits",
    "replace_key",
    "replace_keys",
    "replacement_for",
]
