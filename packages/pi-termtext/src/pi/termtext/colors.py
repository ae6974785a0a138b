"""ANSI color names, indices and hex conversion."""

from __future__ import annotations

from typing import NamedTuple

_COLOR_NAME_TO_INDEX: dict[str, int] = {
    "black": 0,
    "red": 1,
    "green": 2,
    "yellow": 3,
    "blue": 4,
    "magenta": 5,
    "violet": 5,
    "cyan": 6,
    "white": 7,
    "grey": 8,
    "gray": 8,
    "brightblack": 8,
    "brightred": 9,
    "brightgreen": 10,
    "brightyellow": 11,
    "brightblue": 12,
    "brightmagenta": 13,
    "brightviolet": 13,
    "brightcyan": 14,
    "brightwhite": 15,
}

_INDEX_TO_COLOR_NAME = (
    "black", "red", "green", "yellow", "blue", "magenta", "cyan", "white",
    "gray", "brightred", "brightgreen", "brightyellow", "brightblue",
    "brightmagenta", "brightcyan", "brightwhite",
)


class Rgba(NamedTuple):
    r: int
    g: int
    b: int
    a: int = 255


def color_name_to_index(name: str) -> int | None:
    """Return the 0-15 palette index for a color *name*, or ``None``.

    Matching ignores case, so ``"brightRed"`` and ``"brightred"`` agree.
    """
    return _COLOR_NAME_TO_INDEX.get(name.lower())


def index_to_color_name(index: int) -> str | None:
    """Return the canonical name of palette entry *index*, or ``None``."""
    if 0 <= index < len(_INDEX_TO_COLOR_NAME):
        return _INDEX_TO_COLOR_NAME[index]
    return None


def hex_to_rgba(hex_color: str) -> Rgba:
    """Convert ``#rgb``, ``#rrggbb`` or ``#rrggbbaa`` to an :class:`Rgba`.

    The leading ``#`` is optional.  Raises ``ValueError`` on bad input.
    """
    value = hex_color[1:] if hex_color.startswith("#") else hex_color

    if len(value) == 3:
        value = "".join(ch * 2 for ch in value)
    if len(value) not in (6, 8):
        raise ValueError(f"Invalid hex color: {hex_color!r}")

    return Rgba(
        r=int(value[0:2], 16),
        g=int(value[2:4], 16),
        b=int(value[4:6], 16),
        a=int(value[6:8], 16) if len(value) == 8 else 255,
    )
