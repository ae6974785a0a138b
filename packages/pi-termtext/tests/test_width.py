"""Tests for pi.termtext.width -- display width and truncation."""

from __future__ import annotations

import pytest

from pi.termtext.ansi import tokenize_control_sequences
from pi.termtext.markup import tokenize_markup
from pi.termtext.width import (
    TruncateResult,
    display_width,
    fit_to_width,
    truncate_markup,
    truncate_to_width,
)

SAMPLES = [
    "hello world",
    "\x1b[31mhi\x1b[0m",
    "日本語abc",
    "a\x1b[1m日\x1b[22mb語c",
    "e\u0301tude",
]

MALFORMED = [
    "\x1b[31;x",
    "ab\x1b[31;xyz",
    "\x1b7;x\x1b[;q",
    "b1;3[m\x1b7",
    "\x1b[12;;日本\x1b[",
]


# ---------------------------------------------------------------------------
# display_width
# ---------------------------------------------------------------------------


class TestDisplayWidth:
    """Measure the visible terminal width of text or tokens."""

    def test_escape_sequences_are_zero_width(self) -> None:
        assert display_width("\x1b[31mhi\x1b[0m") == 2

    def test_empty(self) -> None:
        assert display_width("") == 0

    def test_only_control_sequences(self) -> None:
        assert display_width("\x1b[1m\x1b[31m\x1b[0m") == 0

    def test_wide_characters(self) -> None:
        assert display_width("日本語") == 6

    def test_combining_mark_is_zero_width(self) -> None:
        assert display_width("e\u0301") == 1

    def test_accepts_tokens(self) -> None:
        assert display_width(tokenize_control_sequences("\x1b[1mab\x1b[0m")) == 2

    def test_markup_tokens(self) -> None:
        assert display_width(tokenize_markup("^ra^^^ b")) == 4

    def test_additive_across_token_boundaries(self) -> None:
        a, b = "\x1b[31m日本", "x\x1b[0m語"
        assert display_width(a + b) == display_width(a) + display_width(b)


# ---------------------------------------------------------------------------
# truncate_to_width
# ---------------------------------------------------------------------------


class TestTruncateToWidth:
    """Width-bounded prefixes that never split a glyph or sequence."""

    def test_stops_before_wide_glyph_that_overflows(self) -> None:
        assert truncate_to_width("日本語abc", 5) == TruncateResult("日本", 4)

    def test_exact_fit_includes_glyph(self) -> None:
        assert truncate_to_width("日本語abc", 6) == TruncateResult("日本語", 6)

    def test_fits_entirely(self) -> None:
        text = "\x1b[31mhello\x1b[0m"
        assert truncate_to_width(text, 5) == TruncateResult(text, 5)

    def test_keeps_control_sequences_in_prefix(self) -> None:
        result = truncate_to_width("\x1b[31mhello\x1b[0m", 3)
        assert result == TruncateResult("\x1b[31mhel", 3)

    def test_no_half_glyph(self) -> None:
        assert truncate_to_width("a日", 2) == TruncateResult("a", 1)

    def test_zero_width_keeps_leading_sequences(self) -> None:
        assert truncate_to_width("\x1b[31mabc", 0) == TruncateResult("\x1b[31m", 0)

    def test_combining_mark_stays_with_base(self) -> None:
        assert truncate_to_width("e\u0301x", 1) == TruncateResult("e\u0301", 1)

    def test_negative_width_rejected(self) -> None:
        with pytest.raises(ValueError):
            truncate_to_width("abc", -1)

    def test_accepts_tokens(self) -> None:
        tokens = tokenize_control_sequences("ab\x1b[1mcd")
        assert truncate_to_width(tokens, 3).text == "ab\x1b[1mc"

    @pytest.mark.parametrize("text", SAMPLES)
    def test_monotonic(self, text: str) -> None:
        full = display_width(text)
        widths = [display_width(truncate_to_width(text, w).text) for w in range(full + 2)]
        assert widths == sorted(widths)
        assert all(w <= full for w in widths)

    @pytest.mark.parametrize("text", SAMPLES)
    def test_realized_width_matches_text(self, text: str) -> None:
        for max_width in range(display_width(text) + 1):
            result = truncate_to_width(text, max_width)
            assert result.width == display_width(result.text)
            assert result.width <= max_width

    @pytest.mark.parametrize("text", MALFORMED)
    def test_realized_width_with_malformed_sequences(self, text: str) -> None:
        for max_width in range(display_width(text) + 2):
            result = truncate_to_width(text, max_width)
            assert result.width == display_width(result.text)
            assert text.startswith(result.text)

    def test_separator_after_sequence_digits(self) -> None:
        assert truncate_to_width("\x1b[31;x", 1) == TruncateResult("\x1b[31;", 1)


class TestTruncateMarkup:
    """Truncate markup text."""

    def test_literal_caret_counts(self) -> None:
        assert truncate_markup("^rab^^cd", 3) == TruncateResult("^rab^^", 3)

    def test_shifted_directive_is_atomic(self) -> None:
        assert truncate_markup("^#^rab", 1) == TruncateResult("^#^ra", 1)

    def test_raw_directive_counts(self) -> None:
        assert truncate_markup("a^ b", 1) == TruncateResult("a", 1)


# ---------------------------------------------------------------------------
# fit_to_width
# ---------------------------------------------------------------------------


class TestFitToWidth:
    """Fit text into a fixed-width field."""

    def test_short_text_unchanged(self) -> None:
        assert fit_to_width("hi", 10) == "hi"

    def test_truncates_with_ellipsis(self) -> None:
        assert fit_to_width("hello world", 5) == "he..."

    def test_custom_ellipsis(self) -> None:
        assert fit_to_width("hello world", 6, ellipsis="..") == "hell.."

    def test_zero_width_returns_empty(self) -> None:
        assert fit_to_width("hello", 0) == ""

    def test_pad_fills_to_width(self) -> None:
        assert fit_to_width("hi", 5, pad=True) == "hi   "

    def test_pad_after_wide_glyph_truncation(self) -> None:
        result = fit_to_width("日本語", 4, ellipsis="…", pad=True)
        assert result == "日… "
        assert display_width(result) == 4

    def test_ellipsis_wider_than_field(self) -> None:
        assert fit_to_width("hello", 2) == ".."
