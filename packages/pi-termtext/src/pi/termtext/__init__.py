"""pi-termtext: escape- and markup-aware terminal text width, truncation and wrapping."""

# ANSI control sequences
from pi.termtext.ansi import (
    iter_control_tokens,
    parse_ansi,
    scan_control_sequence,
    strip_control_chars,
    strip_escape_sequences,
    tokenize_control_sequences,
)

# Code-point widths
from pi.termtext.cells import char_width, is_full_width, text_width

# Colors
from pi.termtext.colors import Rgba, color_name_to_index, hex_to_rgba, index_to_color_name

# Errors
from pi.termtext.errors import MarkupConfigError, TermTextError, UnknownStyleCode

# Markup
from pi.termtext.markup import (
    DEFAULT_MARKUP_CONFIG,
    MarkupConfig,
    TableMode,
    escape_markup,
    iter_markup_tokens,
    load_markup_config,
    markup_width,
    tokenize_markup,
)

# SGR decoding
from pi.termtext.sgr import SGR_CODES, decode_sgr_parameter, decode_sgr_sequence

# Style attributes
from pi.termtext.style import StyleAttributes

# Tokens
from pi.termtext.tokens import (
    ComplexDirective,
    ControlSequence,
    LiteralCaret,
    SimpleDirective,
    TextRun,
    Token,
    join_tokens,
)

# Width and truncation
from pi.termtext.width import (
    TruncateResult,
    display_width,
    fit_to_width,
    truncate_markup,
    truncate_to_width,
)

# Wrapping
from pi.termtext.wrap import (
    ansi_atom_width,
    ansi_atoms,
    markup_atom_width,
    markup_atoms,
    word_wrap,
    word_wrap_ansi,
    word_wrap_markup,
    wrap_atoms_for_width,
)

__all__ = [
    # ansi
    "iter_control_tokens",
    "parse_ansi",
    "scan_control_sequence",
    "strip_control_chars",
    "strip_escape_sequences",
    "tokenize_control_sequences",
    # cells
    "char_width",
    "is_full_width",
    "text_width",
    # colors
    "Rgba",
    "color_name_to_index",
    "hex_to_rgba",
    "index_to_color_name",
    # errors
    "MarkupConfigError",
    "TermTextError",
    "UnknownStyleCode",
    # markup
    "DEFAULT_MARKUP_CONFIG",
    "MarkupConfig",
    "TableMode",
    "escape_markup",
    "iter_markup_tokens",
    "load_markup_config",
    "markup_width",
    "tokenize_markup",
    # sgr
    "SGR_CODES",
    "decode_sgr_parameter",
    "decode_sgr_sequence",
    # style
    "StyleAttributes",
    # tokens
    "ComplexDirective",
    "ControlSequence",
    "LiteralCaret",
    "SimpleDirective",
    "TextRun",
    "Token",
    "join_tokens",
    # width
    "TruncateResult",
    "display_width",
    "fit_to_width",
    "truncate_markup",
    "truncate_to_width",
    # wrap
    "ansi_atom_width",
    "ansi_atoms",
    "markup_atom_width",
    "markup_atoms",
    "word_wrap",
    "word_wrap_ansi",
    "word_wrap_markup",
    "wrap_atoms_for_width",
]
