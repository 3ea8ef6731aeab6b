"""Reverse conversion of dump lines back into the original byte stream."""

from __future__ import annotations

import codecs
import re
from typing import Optional, Tuple

from .config import DumpConfig
from .exceptions import ConversionStateError
from .render import FIELD_WIDTH
from .tokens import REPLACEMENT_CHAR

_CODEPOINT_FIELD_RE = re.compile(r" *([0-9A-Fa-f]{1,6})")
_RAW_FIELD_RE = re.compile(r" *\*([0-9A-Fa-f]{2})")

__all__ = ["ConversionState", "DumpParser", "parse_dump_line"]


class ConversionState:
    """Shift state of the output encoder for one reverse run.

    Stateful encodings such as ISO-2022 emit escape sequences that depend on
    what was written before, so every character of a run must go through the
    same encoder.  :meth:`finalize` returns the bytes that bring the encoder
    back to its initial state and retires the instance.
    """

    def __init__(self, encoding: str) -> None:
        self.encoding = encoding
        self._encoder = codecs.getincrementalencoder(encoding)("strict")
        self._finalized = False

    @property
    def finalized(self) -> bool:
        return self._finalized

    def _check(self) -> None:
        if self._finalized:
            raise ConversionStateError("conversion state already finalized")

    def _encode_nul(self) -> bytes:
        return self._encoder.encode("\0")

    def encode_codepoint(self, codepoint: int) -> bytes:
        """Encode one codepoint, substituting U+FFFD when it is unencodable."""

        self._check()
        try:
            return self._encoder.encode(chr(codepoint))
        except ValueError:
            pass
        try:
            return self._encoder.encode(chr(REPLACEMENT_CHAR))
        except UnicodeEncodeError:
            return self._encoder.encode("?")

    def encode_raw(self, value: int) -> bytes:
        """Emit ``value`` verbatim, after any shift sequence a NUL would need."""

        self._check()
        data = bytearray(self._encode_nul())
        data[-1] = value
        return bytes(data)

    def finalize(self) -> bytes:
        self._check()
        trailer = self._encode_nul()[:-1]
        self._finalized = True
        return trailer


def parse_dump_line(line: str, state: ConversionState, linesize: int) -> Tuple[bytes, int]:
    """Decode the hex fields of one dump line.

    Returns the bytes represented by the line and the number of fields
    decoded.  Parsing stops silently at the first field that is neither a
    codepoint nor a raw byte.

    ``linesize`` must match the count the dump was made with.  A larger value
    reads the padding and glyphs of a short line as further fields, e.g. the
    window ``"     A"`` of a four-wide line parsed eight wide becomes U+000A.
    """

    pos = line.find(" ")
    if pos < 0:
        return b"", 0
    pos += 1
    out = bytearray()
    count = 0
    while count < linesize:
        window = line[pos : pos + FIELD_WIDTH]
        match = _CODEPOINT_FIELD_RE.fullmatch(window)
        if match is not None:
            out += state.encode_codepoint(int(match.group(1), 16))
        else:
            match = _RAW_FIELD_RE.fullmatch(window)
            if match is None:
                break
            out += state.encode_raw(int(match.group(1), 16))
        count += 1
        pos += FIELD_WIDTH
    return bytes(out), count


class DumpParser:
    """Parse dump lines of one reverse run through a shared conversion state."""

    def __init__(self, config: DumpConfig, state: Optional[ConversionState] = None) -> None:
        self.linesize = config.count
        self.state = state if state is not None else ConversionState(config.encoding)

    def parse(self, line: str) -> Tuple[bytes, int]:
        return parse_dump_line(line, self.state, self.linesize)

    def finalize(self) -> bytes:
        return self.state.finalize()
