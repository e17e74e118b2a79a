"""Tests for span decomposition, key derivation and record building.

Covers:
- Prefix / text / suffix extraction
- Quote escaping and the reassembly invariant
- Key derivation
- Translatable construction from raw spans
"""

import pytest

from glossa.extraction.builder import build, from_original
from glossa.extraction.decomposer import decompose, escape, unescape
from glossa.extraction.keys import derive_key
from glossa.models import Candidate, Translatable, TranslatableType

# =============================================================================
# Decomposition Tests
# =============================================================================


class TestDecompose:
    """Tests for decompose()."""

    @pytest.mark.parametrize(
        ("original", "expected"),
        [
            (" simple text: ", (" ", "simple text", ": ")),
            (". simple text: ", (". ", "simple text", ": ")),
            ("simple, with comma. Text", ("", "simple, with comma. Text", "")),
            ("simple text: ", ("", "simple text", ": ")),
            (" simple text", (" ", "simple text", "")),
            ("simple text", ("", "simple text", "")),
            ("simple text *", ("", "simple text", " *")),
            ("simple text, ", ("", "simple text", ", ")),
            (", simple text: ", (", ", "simple text", ": ")),
            ("'s simple text: ", ("'s ", "simple text", ": ")),
            ("-- simple text: ", ("-- ", "simple text", ": ")),
            ('", simple text: ', ('", ', "simple text", ": ")),
        ],
    )
    def test_decoration_split(self, original: str, expected: tuple[str, str, str]) -> None:
        assert decompose(original) == expected

    def test_inner_quotes_escaped(self) -> None:
        prefix, text, suffix = decompose(', "complex" text: ')
        assert prefix == ", "
        assert text == '\\"complex\\" text'
        assert suffix == ": "

    def test_multiline_prefix(self) -> None:
        assert decompose("  \n    See in") == ("  \n    ", "See in", "")

    def test_decoration_only(self) -> None:
        """A span of pure whitespace is all prefix."""
        assert decompose("   ") == ("   ", "", "")

    def test_empty(self) -> None:
        assert decompose("") == ("", "", "")

    @pytest.mark.parametrize(
        "original",
        [
            " simple text: ",
            ', "complex" text: ',
            '", simple text: ',
            "  \n    See in",
            "the text below   ",
            "a \\\"quoted\\\" backslash",
            ": *, ",
            " ",
            "",
        ],
    )
    def test_reassembly_invariant(self, original: str) -> None:
        """prefix + unescape(text) + suffix reproduces the original span."""
        prefix, text, suffix = decompose(original)
        assert prefix + unescape(text) + suffix == original


class TestEscaping:
    """Tests for escape() / unescape()."""

    def test_escape_quotes(self) -> None:
        assert escape('say "hi"') == 'say \\"hi\\"'

    def test_unescape_reverses_escape(self) -> None:
        for value in ['say "hi"', 'back\\"slash', "plain", '""']:
            assert unescape(escape(value)) == value


# =============================================================================
# Key Derivation Tests
# =============================================================================


class TestDeriveKey:
    """Tests for derive_key()."""

    def test_words_joined(self) -> None:
        assert derive_key("Show page") == "show_page"

    def test_punctuation_removed(self) -> None:
        assert derive_key("symbols @|/()[]{}':+%=!& removed") == "symbols_removed"

    def test_escaped_quotes_dropped(self) -> None:
        assert derive_key('\\"complex\\" text') == "complex_text"

    def test_multiline_whitespace_collapsed(self) -> None:
        assert derive_key("A page \ntitle") == "a_page_title"

    def test_comma_and_period(self) -> None:
        assert derive_key("simple, with comma. Text") == "simple_with_comma_text"

    def test_empty(self) -> None:
        assert derive_key("") == ""

    def test_deterministic_and_idempotent(self) -> None:
        text = "Leave a comment!"
        key = derive_key(text)
        assert key == derive_key(text)
        assert derive_key(key) == key


# =============================================================================
# Builder Tests
# =============================================================================


class TestFromOriginal:
    """Tests for from_original()."""

    def test_defaults_to_html(self) -> None:
        assert from_original(" simple text: ") == Translatable(
            original=" simple text: ",
            text="simple text",
            key="simple_text",
            prefix=" ",
            suffix=": ",
            type=TranslatableType.HTML,
        )

    def test_erb_type_from_string(self) -> None:
        record = from_original("A page title", "erb")
        assert record.type == TranslatableType.ERB
        assert record.type == "erb"
        assert record.key == "a_page_title"

    def test_complex_quotes(self) -> None:
        record = from_original(', "complex" text: ')
        assert record.text == '\\"complex\\" text'
        assert record.key == "complex_text"
        assert record.decorated is True

    def test_offsets_ignored_in_equality(self) -> None:
        pinned = from_original("Show page", start=3, end=12)
        assert pinned == from_original("Show page")
        assert pinned.span == (3, 12)
        assert from_original("Show page").span is None

    def test_build_from_candidate(self) -> None:
        record = build(Candidate("Leave a comment", TranslatableType.ERB, 10, 25))
        assert record.key == "leave_a_comment"
        assert record.type == TranslatableType.ERB
        assert record.span == (10, 25)

    def test_to_dict(self) -> None:
        assert from_original("Show page").to_dict() == {
            "original": "Show page",
            "text": "Show page",
            "key": "show_page",
            "prefix": "",
            "suffix": "",
            "type": "html",
        }
