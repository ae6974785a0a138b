"""Token types produced by the control-sequence and markup tokenizers.

Every token keeps its exact source text in ``raw``; joining the ``raw`` of
a token sequence reproduces the tokenized input.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Union

from pi.termtext.cells import text_width
from pi.termtext.colors import color_name_to_index
from pi.termtext.style import StyleAttributes, field_name_for


@dataclass(frozen=True)
class TextRun:
    """Printable content."""

    raw: str

    @property
    def width(self) -> int:
        return text_width(self.raw)


@dataclass(frozen=True)
class ControlSequence:
    """An ANSI escape sequence, kept byte-for-byte."""

    raw: str

    @property
    def width(self) -> int:
        return 0


@dataclass(frozen=True)
class SimpleDirective:
    """A ``^X`` markup directive (``^#^X`` when shifted)."""

    raw: str
    attributes: StyleAttributes = field(default_factory=StyleAttributes)

    @property
    def width(self) -> int:
        if self.attributes.raw is None:
            return 0
        return text_width(self.attributes.raw)


@dataclass(frozen=True)
class ComplexDirective:
    """A bracketed ``^[key,key:value]`` markup directive."""

    raw: str
    custom: dict[str, str | bool] = field(default_factory=dict)

    @property
    def width(self) -> int:
        return 0

    @property
    def attributes(self) -> StyleAttributes:
        """Project the keys that name style attributes onto a StyleAttributes.

        Color values may be palette indices or color names.  Keys that are
        not style attributes, and values that cannot be interpreted, are
        ignored.
        """
        kwargs: dict[str, object] = {}
        for key, value in self.custom.items():
            name = field_name_for(key)
            if name is None:
                continue
            if name in ("color", "bg_color"):
                index = _color_value(value)
                if index is not None:
                    kwargs[name] = index
            elif name == "raw":
                if isinstance(value, str) and len(value) == 1:
                    kwargs[name] = value
            elif value is True:
                kwargs[name] = True
            elif isinstance(value, str) and value.lower() in ("true", "false"):
                kwargs[name] = value.lower() == "true"
        return StyleAttributes(**kwargs)  # type: ignore[arg-type]


@dataclass(frozen=True)
class LiteralCaret:
    """The ``^^`` escape, displayed as one ``^``."""

    raw: str = "^^"

    @property
    def width(self) -> int:
        return 1


Token = Union[TextRun, ControlSequence, SimpleDirective, ComplexDirective, LiteralCaret]


def join_tokens(tokens: Iterable[Token]) -> str:
    """Concatenate the raw text of *tokens*."""
    return "".join(token.raw for token in tokens)


def _color_value(value: str | bool) -> int | None:
    if not isinstance(value, str):
        return None
    if value.isascii() and value.isdigit():
        index = int(value)
        return index if 0 <= index <= 15 else None
    return color_name_to_index(value)
