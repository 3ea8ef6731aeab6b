"""Token variants produced by :class:`chd.source.CharacterSource`.

A dump is built from three kinds of values: decoded characters, raw bytes that
could not be decoded and are carried through verbatim, and the end-of-input
marker.  Each kind is its own type so a raw byte can never be mistaken for a
codepoint of the same numeric value.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

CONTROL_PICTURES = 0x2400
REPLACEMENT_CHAR = 0xFFFD
MAX_CODEPOINT = 0x10FFFF

__all__ = [
    "CONTROL_PICTURES",
    "END",
    "EndOfInput",
    "MAX_CODEPOINT",
    "REPLACEMENT_CHAR",
    "Char",
    "RawByte",
    "Token",
]


@dataclass(frozen=True, slots=True)
class Char:
    """A successfully decoded character."""

    codepoint: int

    def __post_init__(self) -> None:
        if not 0 <= self.codepoint <= MAX_CODEPOINT:
            raise ValueError(f"codepoint out of range: {self.codepoint:#x}")

    @classmethod
    def of(cls, text: str) -> "Char":
        return cls(ord(text))


@dataclass(frozen=True, slots=True)
class RawByte:
    """A single octet that was not part of a valid character."""

    value: int

    def __post_init__(self) -> None:
        if not 0 <= self.value <= 0xFF:
            raise ValueError(f"raw byte out of range: {self.value!r}")


class EndOfInput:
    """Singleton marking exhaustion of every input source."""

    _instance: "EndOfInput | None" = None

    def __new__(cls) -> "EndOfInput":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "END"

    def __bool__(self) -> bool:
        return False


END = EndOfInput()

Token = Union[Char, RawByte]
