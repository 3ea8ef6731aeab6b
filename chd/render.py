"""Formatting of codepoint tokens into aligned dump lines.

A dump line with four characters per line has three parts::

    00000000:     48     69    416     0A     H i Ж ␊

the offset label, one six column hex field per token, and the glyph column.
Short lines are padded so the glyph column always starts at the same position.
"""

from __future__ import annotations

import unicodedata
from typing import Sequence

from .config import DumpConfig
from .tokens import CONTROL_PICTURES, REPLACEMENT_CHAR, Char, RawByte, Token

FIELD_WIDTH = 6
LABEL_WIDTH = 10
GLYPH_GAP = 5
OFFSET_MASK = 0xFFFFFFFF

_ZERO_WIDTH_CATEGORIES = frozenset({"Mn", "Me", "Cf"})
_UNPRINTABLE_CATEGORIES = frozenset({"Cc", "Cs", "Cn"})
_SOFT_HYPHEN = 0x00AD

__all__ = [
    "FIELD_WIDTH",
    "DumpRenderer",
    "display_width",
    "format_offset",
    "glyph_for",
    "hex_field",
]


def display_width(codepoint: int) -> int:
    """Return the terminal column width of ``codepoint``.

    Follows the ``wcwidth`` conventions: -1 for controls, surrogates and
    unassigned codepoints, 0 for combining and format characters, 2 for East
    Asian wide and fullwidth characters and 1 otherwise.
    """

    char = chr(codepoint)
    category = unicodedata.category(char)
    if category in _UNPRINTABLE_CATEGORIES:
        return -1
    if codepoint == _SOFT_HYPHEN:
        return 1
    if category in _ZERO_WIDTH_CATEGORIES or 0x1160 <= codepoint <= 0x11FF:
        return 0
    if unicodedata.east_asian_width(char) in ("W", "F"):
        return 2
    return 1


def format_offset(offset: int) -> str:
    """Return the line label; offsets past 32 bits wrap around."""

    return f"{offset & OFFSET_MASK:08X}: "


def hex_field(token: Token) -> str:
    if isinstance(token, RawByte):
        return f"   *{token.value:02X}"
    if token.codepoint < 256:
        return f"    {token.codepoint:02X}"
    return f"{token.codepoint:6X}"


def glyph_for(token: Token) -> str:
    """Return the glyph column text for ``token``, always two columns wide."""

    if isinstance(token, Char):
        width = display_width(token.codepoint)
        if width == 2:
            return chr(token.codepoint)
        if width == 1:
            return chr(token.codepoint) + " "
        if token.codepoint < 0x20:
            return chr(CONTROL_PICTURES + token.codepoint) + " "
    return chr(REPLACEMENT_CHAR) + " "


class DumpRenderer:
    """Render runs of up to ``config.count`` tokens as dump lines."""

    def __init__(self, config: DumpConfig) -> None:
        self.linesize = config.count

    def render(self, tokens: Sequence[Token], offset: int) -> str:
        count = len(tokens)
        if not 0 < count <= self.linesize:
            raise ValueError(f"expected 1..{self.linesize} tokens, got {count}")
        padding = " " * (FIELD_WIDTH * (self.linesize - count) + GLYPH_GAP)
        parts = [format_offset(offset)]
        parts.extend(hex_field(token) for token in tokens)
        parts.append(padding)
        parts.extend(glyph_for(token) for token in tokens)
        parts.append("\n")
        return "".join(parts)
