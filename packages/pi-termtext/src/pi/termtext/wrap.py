"""Escape- and markup-aware word wrapping.

Text is regrouped into *atoms*: one printable code point, or one complete
control sequence / markup directive.  The greedy wrapper below works on
atoms with a per-atom width function, so it can never split a sequence and
never counts one towards the line width.
"""

from __future__ import annotations

from functools import partial
from typing import Callable, Iterable

from pi.termtext.ansi import iter_control_tokens
from pi.termtext.cells import char_width
from pi.termtext.markup import DEFAULT_MARKUP_CONFIG, MarkupConfig, iter_markup_tokens
from pi.termtext.tokens import TextRun, Token

AtomWidth = Callable[[str], int]


# ---------------------------------------------------------------------------
# Regrouping
# ---------------------------------------------------------------------------


def _atoms(tokens: Iterable[Token]) -> list[str]:
    atoms: list[str] = []
    for token in tokens:
        if isinstance(token, TextRun):
            atoms.extend(token.raw)
        else:
            atoms.append(token.raw)
    return atoms


def ansi_atoms(text: str) -> list[str]:
    """Regroup colored *text* into atoms."""
    return _atoms(iter_control_tokens(text))


def markup_atoms(text: str, config: MarkupConfig = DEFAULT_MARKUP_CONFIG) -> list[str]:
    """Regroup markup *text* into atoms."""
    return _atoms(iter_markup_tokens(text, config))


def ansi_atom_width(atom: str) -> int:
    """Width of an atom produced by :func:`ansi_atoms`."""
    if len(atom) == 1:
        return char_width(atom)
    return 0


def markup_atom_width(atom: str, config: MarkupConfig = DEFAULT_MARKUP_CONFIG) -> int:
    """Width of an atom produced by :func:`markup_atoms`.

    Directives are zero-width except ``^^`` and directives carrying a raw
    character (``^ `` in the default tables).
    """
    if len(atom) == 1:
        return char_width(atom)
    return sum(token.width for token in iter_markup_tokens(atom, config))


# ---------------------------------------------------------------------------
# Generic atom wrapper
# ---------------------------------------------------------------------------


def word_wrap(
    atoms: Iterable[str],
    width: int,
    atom_width: AtomWidth,
    fill: bool = False,
    no_join: bool = True,
) -> list[list[str]]:
    """Greedy word wrap over *atoms*.

    Lines break at spaces where possible; a word longer than *width* is
    broken wherever it overflows.  With *no_join*, ``"\\n"`` atoms are hard
    line breaks, otherwise they are treated as spaces.  With *fill*, every
    line is right-padded with space atoms up to *width*.
    """
    if width <= 0:
        raise ValueError(f"width must be > 0, got {width}")

    physical: list[list[str]] = [[]]
    for atom in atoms:
        if atom == "\n":
            if no_join:
                physical.append([])
                continue
            atom = " "
        physical[-1].append(atom)

    lines: list[list[str]] = []
    for line_atoms in physical:
        lines.extend(_wrap_line(line_atoms, width, atom_width))

    if fill:
        lines = [_fill(line, width, atom_width) for line in lines]
    return lines


def _wrap_line(atoms: list[str], width: int, atom_width: AtomWidth) -> list[list[str]]:
    """Wrap a single physical line (no ``"\\n"`` atoms)."""
    lines: list[list[str]] = []
    current: list[str] = []
    current_width = 0
    break_at: int | None = None  # index just past the last usable space
    has_word = False
    skip_spaces = False  # drop leading spaces of continuation lines

    for atom in atoms:
        w = atom_width(atom)

        if atom == " " and skip_spaces:
            continue

        if w > 0 and current_width > 0 and current_width + w > width:
            if atom == " ":
                lines.append(_trim_trailing_spaces(current, atom_width))
                current, current_width = [], 0
                break_at, has_word, skip_spaces = None, False, True
                continue

            if break_at is not None:
                lines.append(_trim_trailing_spaces(current[:break_at], atom_width))
                current = current[break_at:]
                current_width = sum(atom_width(a) for a in current)
            else:
                lines.append(current)
                current, current_width = [], 0
            break_at = None
            has_word = any(a != " " and atom_width(a) > 0 for a in current)

        current.append(atom)
        current_width += w
        if atom == " ":
            if has_word:
                break_at = len(current)
        elif w > 0:
            has_word = True
            skip_spaces = False

    if current_width == 0 and lines:
        # Only zero-width atoms left: keep them on the last line
        lines[-1].extend(current)
    else:
        lines.append(current)
    return lines


def _trim_trailing_spaces(atoms: list[str], atom_width: AtomWidth) -> list[str]:
    """Drop space atoms after the last visible non-space atom."""
    last = -1
    for index, atom in enumerate(atoms):
        if atom != " " and atom_width(atom) > 0:
            last = index
    return atoms[: last + 1] + [a for a in atoms[last + 1 :] if a != " "]


def _fill(atoms: list[str], width: int, atom_width: AtomWidth) -> list[str]:
    line_width = sum(atom_width(a) for a in atoms)
    if line_width >= width:
        return atoms
    return atoms + [" "] * (width - line_width)


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------


def wrap_atoms_for_width(
    text: str,
    width: int,
    markup: bool = False,
    config: MarkupConfig = DEFAULT_MARKUP_CONFIG,
) -> list[list[str]]:
    """Wrap *text* to *width* columns and return each line as its atoms.

    *text* is colored text by default, or markup when *markup* is ``True``.
    Lines are filled to *width* and existing newlines are kept as breaks.
    """
    if markup:
        return word_wrap(
            markup_atoms(text, config),
            width,
            partial(markup_atom_width, config=config),
            fill=True,
            no_join=True,
        )
    return word_wrap(ansi_atoms(text), width, ansi_atom_width, fill=True, no_join=True)


def word_wrap_ansi(text: str, width: int) -> list[str]:
    """Wrap colored *text* into lines of exactly *width* columns."""
    return ["".join(line) for line in wrap_atoms_for_width(text, width)]


def word_wrap_markup(
    text: str, width: int, config: MarkupConfig = DEFAULT_MARKUP_CONFIG
) -> list[str]:
    """Wrap markup *text* into lines of exactly *width* columns."""
    return [
        "".join(line)
        for line in wrap_atoms_for_width(text, width, markup=True, config=config)
    ]
