"""Unicode-aware codepoint dump and its reverse conversion."""

from __future__ import annotations

__version__ = "1.1"

from .config import DumpConfig, parse_number  # noqa: E402
from .dump import dump, run, undump  # noqa: E402
from .exceptions import ChdError, ConfigError, ConversionStateError  # noqa: E402
from .parse import ConversionState, DumpParser, parse_dump_line  # noqa: E402
from .render import DumpRenderer, display_width, glyph_for  # noqa: E402
from .source import CharacterSource, ErrorReporter, InputSet, LineSource  # noqa: E402
from .tokens import END, Char, RawByte, Token  # noqa: E402

__all__ = [
    "END",
    "CharacterSource",
    "Char",
    "ChdError",
    "ConfigError",
    "ConversionState",
    "ConversionStateError",
    "DumpConfig",
    "DumpParser",
    "DumpRenderer",
    "ErrorReporter",
    "InputSet",
    "LineSource",
    "RawByte",
    "Token",
    "__version__",
    "display_width",
    "dump",
    "glyph_for",
    "parse_dump_line",
    "parse_number",
    "run",
    "undump",
]
