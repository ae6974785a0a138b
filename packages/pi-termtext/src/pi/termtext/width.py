"""Display width measurement and width-bounded truncation.

Only text contributes columns; control sequences and markup directives are
zero-width (apart from directives that carry a raw character, and ``^^``).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Union

from pi.termtext.ansi import iter_control_tokens
from pi.termtext.cells import char_width
from pi.termtext.markup import DEFAULT_MARKUP_CONFIG, MarkupConfig, iter_markup_tokens
from pi.termtext.tokens import TextRun, Token

TextOrTokens = Union[str, Iterable[Token]]


def _as_tokens(value: TextOrTokens) -> Iterable[Token]:
    if isinstance(value, str):
        return iter_control_tokens(value)
    return value


# ---------------------------------------------------------------------------
# display_width
# ---------------------------------------------------------------------------


def display_width(value: TextOrTokens) -> int:
    """Return the number of terminal columns *value* occupies.

    A string is tokenized for escape sequences first; a token sequence is
    measured as given.
    """
    return sum(token.width for token in _as_tokens(value))


# ---------------------------------------------------------------------------
# truncate_to_width
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TruncateResult:
    """A truncated string and the width it actually occupies.

    ``width`` may be less than the requested maximum when the next glyph
    was double-width and did not fit.
    """

    text: str
    width: int


def _take_run(raw: str, budget: int) -> tuple[str, int]:
    """Return the longest prefix of *raw* fitting in *budget* columns."""
    width = 0
    for index, ch in enumerate(raw):
        w = char_width(ch)
        if width + w > budget:
            return raw[:index], width
        width += w
    return raw, width


def truncate_to_width(value: TextOrTokens, max_width: int) -> TruncateResult:
    """Keep the longest prefix of *value* whose width is at most *max_width*.

    Tokens are never split: a control sequence or directive lies entirely on
    one side of the cut, and a wide glyph that would overflow is dropped
    whole.  Zero-width tokens and code points ahead of the first glyph that
    does not fit are kept.
    """
    if max_width < 0:
        raise ValueError(f"max_width must be >= 0, got {max_width}")

    parts: list[str] = []
    width = 0

    for token in _as_tokens(value):
        token_width = token.width
        if width + token_width <= max_width:
            parts.append(token.raw)
            width += token_width
            continue

        if isinstance(token, TextRun):
            prefix, prefix_width = _take_run(token.raw, max_width - width)
            parts.append(prefix)
            width += prefix_width
        break

    return TruncateResult("".join(parts), width)


def truncate_markup(
    text: str, max_width: int, config: MarkupConfig = DEFAULT_MARKUP_CONFIG
) -> TruncateResult:
    """Like :func:`truncate_to_width` for markup text (no escape sequences)."""
    return truncate_to_width(iter_markup_tokens(text, config), max_width)


# ---------------------------------------------------------------------------
# fit_to_width
# ---------------------------------------------------------------------------


def fit_to_width(
    text: str,
    max_width: int,
    ellipsis: str = "...",
    pad: bool = False,
) -> str:
    """Lay out colored *text* in a fixed field of *max_width* columns.

    Overlong text is cut with :func:`truncate_to_width` so that the kept
    prefix plus *ellipsis* fits the field.  With *pad*, the field is filled
    with trailing spaces.
    """
    if max_width <= 0:
        return ""

    text_width = display_width(text)
    if text_width <= max_width:
        if pad:
            return text + " " * (max_width - text_width)
        return text

    ellipsis_width = display_width(ellipsis)
    target_width = max_width - ellipsis_width
    if target_width <= 0:
        # No room for any text: the field shows a prefix of the ellipsis
        return truncate_to_width(ellipsis, max_width).text

    truncated = truncate_to_width(text, target_width)
    result = truncated.text + ellipsis

    if pad:
        result_width = truncated.width + ellipsis_width
        if result_width < max_width:
            result += " " * (max_width - result_width)

    return result
