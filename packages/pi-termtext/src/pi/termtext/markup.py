"""Caret-prefixed markup tokenizer.

Syntax::

    ^X           single-character directive looked up in the active table
    ^#^X         shift introducer: ``X`` is looked up in a secondary table
    ^[k,k:v]     complex directive with comma-separated keys / key:value pairs
    ^^           a literal caret

The scan is a single forward pass; the shifted table applies to exactly one
directive and then the base table is restored.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import Any, Iterator

from pi.termtext.errors import MarkupConfigError
from pi.termtext.style import StyleAttributes
from pi.termtext.tokens import (
    ComplexDirective,
    LiteralCaret,
    SimpleDirective,
    TextRun,
    Token,
)

logger = logging.getLogger(__name__)

_ESCAPE_TABLE: dict[int, str | None] = {cp: None for cp in range(0x20)}
_ESCAPE_TABLE[0x7F] = None
_ESCAPE_TABLE[ord("^")] = "^^"


class TableMode(Enum):
    """Which directive table applies to the next ``^X``."""

    BASE = auto()
    SHIFTED = auto()


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class MarkupConfig:
    """Directive tables and aliases driving :func:`tokenize_markup`."""

    directives: dict[str, StyleAttributes] = field(default_factory=dict)
    # Shift character -> name of a table in ``shifted_directives``
    shift_introducers: dict[str, str] = field(default_factory=dict)
    shifted_directives: dict[str, dict[str, StyleAttributes]] = field(
        default_factory=dict
    )
    complex_aliases: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for char, table in self.shift_introducers.items():
            if table not in self.shifted_directives:
                raise MarkupConfigError(
                    f"Shift introducer {char!r} refers to unknown table {table!r}"
                )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MarkupConfig:
        """Build a config from the camelCase mapping used in JSON files.

        Recognized keys: ``markup``, ``shiftMarkup``, ``shiftedMarkup`` and
        ``complexMarkupAliases``.
        """
        try:
            directives = _parse_table(data.get("markup", {}))
            shifted = {
                name: _parse_table(table)
                for name, table in data.get("shiftedMarkup", {}).items()
            }
            shift_introducers = dict(data.get("shiftMarkup", {}))
            aliases = dict(data.get("complexMarkupAliases", {}))
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise MarkupConfigError(f"Invalid markup config: {e}") from e

        return cls(
            directives=directives,
            shift_introducers=shift_introducers,
            shifted_directives=shifted,
            complex_aliases=aliases,
        )

    def table(self, name: str | None = None) -> dict[str, StyleAttributes]:
        """Return the base table, or the shifted table called *name*."""
        if name is None:
            return self.directives
        return self.shifted_directives[name]

    def parse_complex(self, body: str) -> dict[str, str | bool]:
        """Parse the interior of ``^[...]`` into its attribute mapping.

        Empty parts (as in ``^[]`` or ``^[a,,b]``) carry no key and are skipped.
        """
        custom: dict[str, str | bool] = {}
        for part in body.split(","):
            if not part:
                continue
            key, _sep, value = part.partition(":")
            key = self.complex_aliases.get(key, key)
            custom[key] = value if value else True
        return custom


def _parse_table(table: dict[str, Any]) -> dict[str, StyleAttributes]:
    parsed: dict[str, StyleAttributes] = {}
    for char, attributes in table.items():
        if len(char) != 1:
            raise ValueError(f"directive key must be one character: {char!r}")
        parsed[char] = StyleAttributes.from_dict(attributes)
    return parsed


def load_markup_config(path: str | Path) -> MarkupConfig:
    """Load a :class:`MarkupConfig` from a JSON file."""
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise MarkupConfigError(f"Invalid JSON in {path}: {e}") from e
    if not isinstance(data, dict):
        raise MarkupConfigError(f"Markup config in {path} must be an object")
    return MarkupConfig.from_dict(data)


_COLOR_LETTERS = "krgybmcwKRGYBMCW"

DEFAULT_MARKUP_CONFIG = MarkupConfig(
    directives={
        ":": StyleAttributes(reset=True),
        " ": StyleAttributes(reset=True, raw=" "),
        # "Special reset" can also reset forced attributes
        ";": StyleAttributes(reset=True, special=True),
        "-": StyleAttributes(dim=True),
        "+": StyleAttributes(bold=True),
        "_": StyleAttributes(underline=True),
        "/": StyleAttributes(italic=True),
        "!": StyleAttributes(inverse=True),
        **{ch: StyleAttributes(color=i) for i, ch in enumerate(_COLOR_LETTERS)},
    },
    shift_introducers={"#": "background"},
    shifted_directives={
        "background": {
            ":": StyleAttributes(reset=True, default_color=True, bg_default_color=True),
            " ": StyleAttributes(
                reset=True, default_color=True, bg_default_color=True, raw=" "
            ),
            ";": StyleAttributes(
                reset=True, special=True, default_color=True, bg_default_color=True
            ),
            **{ch: StyleAttributes(bg_color=i) for i, ch in enumerate(_COLOR_LETTERS)},
        },
    },
    complex_aliases={"c": "color", "fg": "color", "bg": "bgColor"},
)


# ---------------------------------------------------------------------------
# Tokenizer
# ---------------------------------------------------------------------------


def iter_markup_tokens(
    text: str, config: MarkupConfig = DEFAULT_MARKUP_CONFIG
) -> Iterator[Token]:
    """Lazily tokenize markup *text*."""
    n = len(text)
    i = 0
    mode = TableMode.BASE
    table = config.table()
    pending = ""  # raw text of consumed shift introducers

    while i < n:
        if mode is TableMode.SHIFTED and not _starts_directive(text, i):
            logger.debug("Dangling shift introducer %r at offset %d", pending, i)
            yield SimpleDirective(pending)
            mode, table, pending = TableMode.BASE, config.table(), ""

        if text[i] != "^":
            end = text.find("^", i)
            if end == -1:
                end = n
            yield TextRun(text[i:end])
            i = end
            continue

        if i + 1 >= n:
            yield TextRun("^")
            break

        nxt = text[i + 1]

        if nxt == "[":
            close = text.find("]", i + 2)
            if close == -1:
                logger.debug("Unterminated complex directive at offset %d", i)
                yield TextRun(text[i:])
                break
            yield ComplexDirective(
                text[i : close + 1], config.parse_complex(text[i + 2 : close])
            )
            i = close + 1
            continue

        if nxt == "^":
            yield LiteralCaret()
            i += 2
            continue

        shifted_name = config.shift_introducers.get(nxt)
        if shifted_name is not None:
            mode, table = TableMode.SHIFTED, config.table(shifted_name)
            pending += text[i : i + 2]
            i += 2
            continue

        attributes = table.get(nxt)
        if attributes is None:
            logger.debug("Unknown markup directive %r at offset %d", nxt, i)
            attributes = StyleAttributes()
        yield SimpleDirective(pending + text[i : i + 2], attributes)
        mode, table, pending = TableMode.BASE, config.table(), ""
        i += 2

    if mode is TableMode.SHIFTED:
        logger.debug("Dangling shift introducer %r at end of input", pending)
        yield SimpleDirective(pending)


def _starts_directive(text: str, pos: int) -> bool:
    """Return ``True`` if a plain ``^X`` directive (or another shift) starts at *pos*."""
    if text[pos] != "^" or pos + 1 >= len(text):
        return False
    return text[pos + 1] not in "[^"


def tokenize_markup(
    text: str, config: MarkupConfig = DEFAULT_MARKUP_CONFIG
) -> list[Token]:
    """Split markup *text* into tokens; joining their ``raw`` gives *text*."""
    return list(iter_markup_tokens(text, config))


def markup_width(text: str, config: MarkupConfig = DEFAULT_MARKUP_CONFIG) -> int:
    """Display width of markup *text*, ignoring directives.

    Escape sequences are not recognized here; only markup is.
    """
    return sum(token.width for token in iter_markup_tokens(text, config))


def escape_markup(text: str) -> str:
    """Make *text* safe to embed in markup.

    Control characters are dropped and ``^`` is doubled.
    """
    return text.translate(_ESCAPE_TABLE)
