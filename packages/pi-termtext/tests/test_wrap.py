"""Tests for pi.termtext.wrap -- atom regrouping and word wrap."""

from __future__ import annotations

import pytest

from pi.termtext.ansi import tokenize_control_sequences
from pi.termtext.markup import tokenize_markup
from pi.termtext.tokens import TextRun
from pi.termtext.wrap import (
    ansi_atom_width,
    ansi_atoms,
    markup_atom_width,
    markup_atoms,
    word_wrap,
    word_wrap_ansi,
    word_wrap_markup,
    wrap_atoms_for_width,
)


# ---------------------------------------------------------------------------
# Regrouping
# ---------------------------------------------------------------------------


class TestAtoms:
    """Regroup text into printable code points and whole sequences."""

    def test_ansi_atoms(self) -> None:
        assert ansi_atoms("\x1b[31mab\x1b[0m") == ["\x1b[31m", "a", "b", "\x1b[0m"]

    def test_markup_atoms(self) -> None:
        assert markup_atoms("^ra^#^b^^") == ["^r", "a", "^#^b", "^^"]

    def test_ansi_atom_width(self) -> None:
        assert ansi_atom_width("\x1b[31m") == 0
        assert ansi_atom_width("日") == 2
        assert ansi_atom_width("a") == 1

    def test_markup_atom_width(self) -> None:
        assert markup_atom_width("^ ") == 1
        assert markup_atom_width("^^") == 1
        assert markup_atom_width("^r") == 0
        assert markup_atom_width("^#^r") == 0


# ---------------------------------------------------------------------------
# word_wrap
# ---------------------------------------------------------------------------


class TestWordWrap:
    """The generic atom wrapper."""

    def test_breaks_at_space(self) -> None:
        lines = word_wrap(list("hello world"), 6, ansi_atom_width)
        assert lines == [list("hello"), list("world")]

    def test_long_word_forced_break(self) -> None:
        lines = word_wrap(list("abcdefghij"), 4, ansi_atom_width)
        assert ["".join(line) for line in lines] == ["abcd", "efgh", "ij"]

    def test_leading_indent_kept(self) -> None:
        lines = word_wrap(list("  ab cd"), 5, ansi_atom_width)
        assert ["".join(line) for line in lines] == ["  ab", "cd"]

    def test_fill_pads_lines(self) -> None:
        lines = word_wrap(list("ab cd"), 4, ansi_atom_width, fill=True)
        assert ["".join(line) for line in lines] == ["ab  ", "cd  "]

    def test_join_turns_newlines_into_spaces(self) -> None:
        lines = word_wrap(list("ab\ncd"), 10, ansi_atom_width, no_join=False)
        assert lines == [list("ab cd")]

    def test_no_join_keeps_newlines(self) -> None:
        lines = word_wrap(list("ab\ncd"), 10, ansi_atom_width)
        assert lines == [list("ab"), list("cd")]

    def test_trailing_zero_width_atoms_stay_on_last_line(self) -> None:
        atoms = ansi_atoms("abc \x1b[0m")
        assert word_wrap(atoms, 3, ansi_atom_width) == [["a", "b", "c", "\x1b[0m"]]

    def test_non_positive_width_rejected(self) -> None:
        with pytest.raises(ValueError):
            word_wrap(list("abc"), 0, ansi_atom_width)


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------


class TestWrapAtomsForWidth:
    """Escape-aware wrapping entry points."""

    def test_filled_lines(self) -> None:
        assert wrap_atoms_for_width("hello world", 6) == [
            list("hello "),
            list("world "),
        ]

    def test_sequences_not_counted(self) -> None:
        lines = word_wrap_ansi("\x1b[31mhello world\x1b[0m", 5)
        assert lines == ["\x1b[31mhello", "world\x1b[0m"]

    def test_wide_glyphs_not_split(self) -> None:
        assert word_wrap_ansi("日本語", 4) == ["日本", "語  "]

    def test_newlines_are_hard_breaks(self) -> None:
        assert word_wrap_ansi("ab\ncd", 4) == ["ab  ", "cd  "]

    def test_malformed_sequence_stays_together(self) -> None:
        assert word_wrap_ansi("ab\x1b[31;x", 4) == ["ab\x1b[31;x"]

    def test_empty_text(self) -> None:
        assert word_wrap_ansi("", 3) == ["   "]

    def test_markup(self) -> None:
        assert word_wrap_markup("^rhello ^bworld", 5) == ["^rhello", "^bworld"]

    def test_markup_atoms_flag(self) -> None:
        lines = wrap_atoms_for_width("^+ab", 2, markup=True)
        assert lines == [["^+", "a", "b"]]

    def test_ansi_sequences_are_atomic(self) -> None:
        text = "\x1b[1mbold\x1b[22m and \x1b[38;5;0mnot\x1b[0m really wrapped text"
        sequences = {
            token.raw
            for token in tokenize_control_sequences(text)
            if not isinstance(token, TextRun)
        }
        for width in range(1, 12):
            for line in wrap_atoms_for_width(text, width):
                for atom in line:
                    assert len(atom) == 1 or atom in sequences

    def test_markup_directives_are_atomic(self) -> None:
        text = "^#^r^+some ^[fg:blue]styled^: text^^ here"
        directives = {
            token.raw
            for token in tokenize_markup(text)
            if not isinstance(token, TextRun)
        }
        for width in range(1, 10):
            for line in wrap_atoms_for_width(text, width, markup=True):
                for atom in line:
                    assert len(atom) == 1 or atom in directives
