"""Exception types raised by pi.termtext."""

from __future__ import annotations


class TermTextError(Exception):
    """Base class for all pi.termtext errors."""


class UnknownStyleCode(TermTextError, ValueError):
    """Raised when an SGR parameter has no known style mapping."""

    def __init__(self, code: str) -> None:
        self.code = code
        super().__init__(f"Unknown SGR style code: {code!r}")


class MarkupConfigError(TermTextError, ValueError):
    """Raised when a markup configuration mapping or file is malformed."""
