"""Control-sequence tokenizer and ANSI stripping helpers.

Splits text into :class:`TextRun` and :class:`ControlSequence` tokens with a
forward scan: introducer, optional prefix and parameter bytes, then one
final byte.  Text that only looks like the start of a sequence stays in the
surrounding :class:`TextRun`.
"""

from __future__ import annotations

import logging
from typing import Iterator, Union

from pi.termtext.sgr import decode_sgr_sequence
from pi.termtext.style import StyleAttributes
from pi.termtext.tokens import ControlSequence, TextRun, Token

logger = logging.getLogger(__name__)

# ESC and the 8-bit CSI
_INTRODUCERS = frozenset("\x1b\x9b")
_PREFIX_CHARS = frozenset("[()#;?")
_PARAM_CHARS = frozenset("0123456789;")
_FINAL_CHARS = frozenset("0123456789ABCDEFGHIJKLMNORZcfghijklmnqry=><")

_CONTROL_CHARS = {cp: None for cp in (*range(0x00, 0x20), *range(0x7F, 0xA0))}
_CONTROL_CHARS_KEEP_NEWLINE = {cp: None for cp in _CONTROL_CHARS if cp != 0x0A}


# ---------------------------------------------------------------------------
# Scanning
# ---------------------------------------------------------------------------


def scan_control_sequence(text: str, pos: int) -> int | None:
    """Return the end index of the control sequence starting at *pos*.

    Returns ``None`` if *pos* does not start a complete sequence.
    """
    n = len(text)
    if pos >= n or text[pos] not in _INTRODUCERS:
        return None

    i = pos + 1
    while i < n and text[i] in _PREFIX_CHARS:
        i += 1

    param_start = i
    while i < n and text[i] in _PARAM_CHARS:
        i += 1

    if i < n and text[i] in _FINAL_CHARS:
        return i + 1

    # Fall back to the last digit of the parameter run as the final byte (ESC 7)
    while i > param_start:
        if text[i - 1] in "0123456789":
            return i
        i -= 1

    return None


def iter_control_tokens(text: str) -> Iterator[Token]:
    """Lazily yield :class:`TextRun` and :class:`ControlSequence` tokens."""
    n = len(text)
    literal_start = 0
    i = 0

    while i < n:
        if text[i] in _INTRODUCERS:
            end = scan_control_sequence(text, i)
            if end is not None:
                if literal_start < i:
                    yield TextRun(text[literal_start:i])
                yield ControlSequence(text[i:end])
                i = literal_start = end
                continue
            logger.debug("Malformed escape sequence at offset %d kept as text", i)
        i += 1

    if literal_start < n:
        yield TextRun(text[literal_start:])


def tokenize_control_sequences(text: str) -> list[Token]:
    """Split *text* into text runs and control sequences."""
    return list(iter_control_tokens(text))


# ---------------------------------------------------------------------------
# Stripping
# ---------------------------------------------------------------------------


def strip_escape_sequences(text: str) -> str:
    """Remove every control sequence from *text*."""
    return "".join(
        token.raw for token in iter_control_tokens(text) if isinstance(token, TextRun)
    )


def strip_control_chars(text: str, preserve_newline: bool = False) -> str:
    """Remove C0, DEL and C1 control characters from *text*.

    With *preserve_newline*, ``\\n`` is kept.
    """
    if preserve_newline:
        return text.translate(_CONTROL_CHARS_KEEP_NEWLINE)
    return text.translate(_CONTROL_CHARS)


# ---------------------------------------------------------------------------
# ANSI -> style parsing
# ---------------------------------------------------------------------------


def _sgr_params(raw: str) -> str | None:
    """Return the parameter string of an SGR sequence, or ``None``."""
    if raw.startswith("\x1b["):
        body = raw[2:]
    elif raw.startswith("\x9b"):
        body = raw[1:]
    else:
        return None

    if not body.endswith("m"):
        return None
    params = body[:-1]
    if any(ch not in _PARAM_CHARS for ch in params):
        return None
    return params


def parse_ansi(text: str) -> list[Union[Token, StyleAttributes]]:
    """Parse colored text into text, style changes and other sequences.

    Each SGR parameter becomes its own :class:`StyleAttributes` entry, so
    ``ESC[1;31m`` yields ``bold`` then ``color=1``.  Non-SGR control
    sequences are passed through unchanged.

    Raises :class:`~pi.termtext.errors.UnknownStyleCode` for SGR parameters
    without a mapping.
    """
    output: list[Union[Token, StyleAttributes]] = []
    for token in iter_control_tokens(text):
        if isinstance(token, ControlSequence):
            params = _sgr_params(token.raw)
            if params is not None:
                output.extend(decode_sgr_sequence(params))
                continue
        output.append(token)
    return output
