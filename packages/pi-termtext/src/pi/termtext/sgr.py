"""SGR (Select Graphic Rendition) parameter decoding."""

from __future__ import annotations

from pi.termtext.errors import UnknownStyleCode
from pi.termtext.style import StyleAttributes


def _build_table() -> dict[str, StyleAttributes]:
    table: dict[str, StyleAttributes] = {
        "0": StyleAttributes(reset=True),
        "1": StyleAttributes(bold=True),
        "2": StyleAttributes(dim=True),
        # 22 is "normal intensity": clears both bold and dim
        "22": StyleAttributes(bold=False, dim=False),
        "3": StyleAttributes(italic=True),
        "23": StyleAttributes(italic=False),
        "4": StyleAttributes(underline=True),
        "24": StyleAttributes(underline=False),
        "5": StyleAttributes(blink=True),
        "25": StyleAttributes(blink=False),
        "7": StyleAttributes(inverse=True),
        "27": StyleAttributes(inverse=False),
        "8": StyleAttributes(hidden=True),
        "28": StyleAttributes(hidden=False),
        "9": StyleAttributes(strike=True),
        "29": StyleAttributes(strike=False),
        "39": StyleAttributes(default_color=True),
        "49": StyleAttributes(bg_default_color=True),
    }
    for i in range(8):
        table[str(30 + i)] = StyleAttributes(color=i)
        table[str(90 + i)] = StyleAttributes(color=8 + i)
        table[str(40 + i)] = StyleAttributes(bg_color=i)
        table[str(100 + i)] = StyleAttributes(bg_color=8 + i)
    return table


SGR_CODES: dict[str, StyleAttributes] = _build_table()


def decode_sgr_parameter(code: str) -> StyleAttributes:
    """Map one SGR numeric parameter (e.g. ``"31"``) to its style change.

    Raises :class:`UnknownStyleCode` if the code is not in the table.
    """
    try:
        return SGR_CODES[code]
    except KeyError:
        raise UnknownStyleCode(code) from None


def decode_sgr_sequence(params: str) -> list[StyleAttributes]:
    """Decode a ``;``-separated SGR parameter list, one entry per parameter.

    An empty list (as in ``ESC[m``) or an empty parameter is a reset.
    """
    if not params:
        return [SGR_CODES["0"]]
    return [decode_sgr_parameter(code or "0") for code in params.split(";")]
