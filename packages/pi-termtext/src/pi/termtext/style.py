"""Style attribute sets shared by the markup and SGR layers.

Every field is tri-state: ``None`` means "no change", ``True``/``False``
(or a color index) is an explicit instruction.  Only explicit ``False``
values turn an attribute off.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any

# Field name -> camelCase key used by markup tables and complex directives
_CAMEL_NAMES: dict[str, str] = {
    "reset": "reset",
    "bold": "bold",
    "dim": "dim",
    "italic": "italic",
    "underline": "underline",
    "blink": "blink",
    "inverse": "inverse",
    "hidden": "hidden",
    "strike": "strike",
    "color": "color",
    "bg_color": "bgColor",
    "default_color": "defaultColor",
    "bg_default_color": "bgDefaultColor",
    "special": "special",
    "raw": "raw",
}

_FIELD_NAMES: dict[str, str] = {camel: name for name, camel in _CAMEL_NAMES.items()}

_COLOR_FIELDS = frozenset({"color", "bg_color"})


@dataclass(frozen=True)
class StyleAttributes:
    """A fixed-shape set of style changes."""

    reset: bool | None = None
    bold: bool | None = None
    dim: bool | None = None
    italic: bool | None = None
    underline: bool | None = None
    blink: bool | None = None
    inverse: bool | None = None
    hidden: bool | None = None
    strike: bool | None = None
    color: int | None = None
    bg_color: int | None = None
    default_color: bool | None = None
    bg_default_color: bool | None = None
    special: bool | None = None
    raw: str | None = None

    def __post_init__(self) -> None:
        for name in _COLOR_FIELDS:
            value = getattr(self, name)
            if value is not None and not 0 <= value <= 15:
                raise ValueError(f"{name} must be in 0..15, got {value}")
        if self.raw is not None and len(self.raw) != 1:
            raise ValueError(f"raw must be a single character, got {self.raw!r}")

    def is_empty(self) -> bool:
        """Return ``True`` when no field is set."""
        return all(getattr(self, f.name) is None for f in fields(self))

    def merge(self, other: StyleAttributes) -> StyleAttributes:
        """Return a copy with every field set in *other* applied on top."""
        changes = {
            f.name: getattr(other, f.name)
            for f in fields(other)
            if getattr(other, f.name) is not None
        }
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        """Return only the set fields, keyed by their camelCase names."""
        return {
            _CAMEL_NAMES[f.name]: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> StyleAttributes:
        """Build from a mapping keyed by camelCase or snake_case field names.

        Raises ``KeyError`` for unknown keys.
        """
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            name = _FIELD_NAMES.get(key, key)
            if name not in _CAMEL_NAMES:
                raise KeyError(key)
            kwargs[name] = value
        return cls(**kwargs)


def field_name_for(key: str) -> str | None:
    """Map a camelCase or snake_case attribute key to its field name."""
    name = _FIELD_NAMES.get(key, key)
    return name if name in _CAMEL_NAMES else None
