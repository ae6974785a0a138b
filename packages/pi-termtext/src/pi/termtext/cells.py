"""Per-code-point terminal cell widths."""

from __future__ import annotations

import wcwidth as _wcwidth

# ---------------------------------------------------------------------------
# Width cache (capped at 512 entries)
# ---------------------------------------------------------------------------

_width_cache: dict[str, int] = {}
_WIDTH_CACHE_MAX = 512


def _cache_width(key: str, value: int) -> int:
    if len(_width_cache) >= _WIDTH_CACHE_MAX:
        _width_cache.clear()
    _width_cache[key] = value
    return value


def char_width(ch: str) -> int:
    """Return the terminal column width of a single code point.

    Combining marks and other zero-width code points are 0, East Asian
    wide / full-width code points are 2, everything else is 1.  Control
    characters occupy no column and are reported as 0.
    """
    cp = ord(ch)
    if 0x20 <= cp <= 0x7E:
        return 1
    if cp < 0x20 or 0x7F <= cp <= 0x9F:
        return 0
    return max(_wcwidth.wcwidth(ch), 0)


def is_full_width(ch: str) -> bool:
    """Return ``True`` if *ch* occupies two columns."""
    return char_width(ch) == 2


def text_width(text: str) -> int:
    """Sum of :func:`char_width` over *text*, with no escape awareness."""
    if not text:
        return 0

    # Fast ASCII path: all codepoints in 0x20..0x7E
    if text.isascii() and text.isprintable():
        return len(text)

    cached = _width_cache.get(text)
    if cached is not None:
        return cached

    return _cache_width(text, sum(char_width(ch) for ch in text))
