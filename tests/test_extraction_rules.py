"""Tests for rule tables and the candidate classifier."""

import pytest

from glossa.errors import RuleSetError
from glossa.extraction.classifier import (
    is_translatable,
    rejecting_rule,
    suppress_noise,
    suppress_noise_with_offsets,
)
from glossa.extraction.rules import (
    DEFAULT_RULESET,
    RuleMode,
    RuleSet,
    exclude,
    suppress,
)

# =============================================================================
# RuleSet Tests
# =============================================================================


class TestRuleSet:
    """Tests for RuleSet configuration values."""

    def test_default_ruleset_modes(self) -> None:
        assert all(rule.mode is RuleMode.EXCLUDE for rule in DEFAULT_RULESET.exclusions)
        assert all(rule.mode is RuleMode.SUPPRESS for rule in DEFAULT_RULESET.suppressions)
        assert len(DEFAULT_RULESET.exclusions) == 13
        assert len(DEFAULT_RULESET.suppressions) == 11

    def test_suppression_order(self) -> None:
        names = [rule.name for rule in DEFAULT_RULESET.suppressions]
        assert names[0] == "render_partial"
        assert names.index("empty_string") < names.index("identifier")
        assert names[-1] == "symbols"

    def test_get_by_name(self) -> None:
        assert DEFAULT_RULESET.get("percent").mode is RuleMode.EXCLUDE

    def test_get_unknown_raises(self) -> None:
        with pytest.raises(RuleSetError, match="Unknown rule"):
            DEFAULT_RULESET.get("nope")

    def test_extend_returns_new_ruleset(self) -> None:
        extra = exclude("todo", r"^TODO", "Placeholder text")
        extended = DEFAULT_RULESET.extend(extra)

        assert extended is not DEFAULT_RULESET
        assert extended.version == "1+1"
        assert extended.exclusions[-1] is extra
        assert len(DEFAULT_RULESET.exclusions) == 13

        assert is_translatable("TODO later") is True
        assert is_translatable("TODO later", extended) is False

    def test_extend_with_explicit_version(self) -> None:
        extended = DEFAULT_RULESET.extend(
            suppress("debug", r"debug\(.*?\)", "debug() calls"), version="2"
        )
        assert extended.version == "2"
        assert extended.suppressions[-1].name == "debug"

    def test_wrong_mode_rejected(self) -> None:
        with pytest.raises(RuleSetError, match="not an exclusion rule"):
            RuleSet(version="x", exclusions=(suppress("s", "x", "misplaced"),))

    def test_duplicate_names_rejected(self) -> None:
        with pytest.raises(RuleSetError, match="Duplicate rule names"):
            DEFAULT_RULESET.extend(exclude("blank", r"^$", "again"))


# =============================================================================
# Markup Classifier Tests
# =============================================================================


class TestMarkupClassifier:
    """Tests for is_translatable() / rejecting_rule()."""

    @pytest.mark.parametrize(
        "span",
        [
            "",
            "   ",
            " \n ",
            "50%",
            "$ 12.34",
            "$12.34",
            "1,234.56",
            "$",
            "null",
            "NULL",
            "'s",
            "/users/1",
            "params[:id]",
            "&nbsp;",
            'class="required"',
            "--",
            " | ",
            "12",
            "+12",
            " <%= user.name %> ",
        ],
    )
    def test_rejected(self, span: str) -> None:
        assert is_translatable(span) is False

    @pytest.mark.parametrize(
        "span",
        [
            "Show page",
            "  \n    See in",
            "the text below   ",
            "Hello world!",
            "The 3 musketeers",
            "Don't panic",
            "Nullable fields",
        ],
    )
    def test_accepted(self, span: str) -> None:
        assert is_translatable(span) is True

    @pytest.mark.parametrize(
        ("span", "rule_name"),
        [
            ("   ", "blank"),
            ("&nbsp;", "html_entity"),
            ('id="main"', "attribute"),
            ("?!", "punctuation"),
            ("/users/1", "path"),
            ("params[:id]", "params"),
            ("12", "integer"),
            ("50%", "percent"),
            ("$ 12.34", "currency"),
            ("null", "null"),
            ("'s", "possessive"),
        ],
    )
    def test_rejecting_rule_named(self, span: str, rule_name: str) -> None:
        rule = rejecting_rule(span)
        assert rule is not None
        assert rule.name == rule_name

    def test_prose_has_no_rejecting_rule(self) -> None:
        assert rejecting_rule("Show page") is None


# =============================================================================
# Noise Suppression Tests
# =============================================================================


class TestSuppressNoise:
    """Tests for suppress_noise() and its offset tracking."""

    def test_render_partial_removed(self) -> None:
        assert suppress_noise('<%= render "form" %>') == "<%=  %>"

    def test_query_calls_removed(self) -> None:
        result = suppress_noise('<%= f.where("Some text").order("other text") "@#." %>')
        assert '"' not in result

    def test_keyword_argument_removed(self) -> None:
        result = suppress_noise('<%= f.button "Save", disabled: "A page \ntitle" %>')
        assert result == '<%= f.button "Save",  %>'

    def test_hash_rocket_with_interpolation_removed(self) -> None:
        source = (
            '<%= f.text_area :content, :class => "required #{"disabled" if ok}", '
            ':placeholder => "Leave a comment" %>'
        )
        result = suppress_noise(source)
        assert "required" not in result
        assert '"Leave a comment"' in result

    def test_identifier_literal_removed(self) -> None:
        assert suppress_noise('<%= "wicked_games game" %>') == "<%=  %>"

    def test_rules_applied_in_order(self) -> None:
        """Removing "" first leaves the surrounding text joined."""
        assert suppress_noise('a""b') == "ab"

    def test_offsets_track_surviving_characters(self) -> None:
        text, offsets = suppress_noise_with_offsets('ab""cd')
        assert text == "abcd"
        assert offsets == [0, 1, 4, 5]

    def test_offsets_identity_without_noise(self) -> None:
        source = "<p>Plain</p>"
        text, offsets = suppress_noise_with_offsets(source)
        assert text == source
        assert offsets == list(range(len(source)))

    def test_custom_ruleset(self) -> None:
        ruleset = RuleSet(version="t", suppressions=(suppress("x", "x+", "x runs"),))
        assert suppress_noise("axxbx", ruleset) == "ab"
