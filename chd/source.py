"""Sequential character and line readers over an ordered list of inputs.

:class:`InputSet` owns the list of input names and the currently open stream.
Names are consumed strictly in order; a name that cannot be opened is reported
and skipped, and a finished stream is closed before the next name is tried.

:class:`CharacterSource` decodes the concatenated inputs one character at a
time.  When raw-byte fallback is enabled, a byte sequence that is invalid for
the active encoding yields its first byte as a :class:`~chd.tokens.RawByte`
and decoding resumes with the byte after it, so every input byte is accounted
for exactly once.  :class:`LineSource` reads dump text lines for reverse mode
from the same kind of input list.
"""

from __future__ import annotations

import codecs
import errno
import logging
import os
import sys
from collections import deque
from typing import BinaryIO, Callable, Deque, Iterator, List, Optional, Sequence, Tuple

from .config import DumpConfig
from .tokens import END, Char, EndOfInput, RawByte, Token

LOGGER = logging.getLogger(__name__)

STDIN_NAME = "-"
STDIN_LABEL = "stdin"

Opener = Callable[[str], BinaryIO]

__all__ = [
    "STDIN_LABEL",
    "STDIN_NAME",
    "CharacterSource",
    "ErrorReporter",
    "InputSet",
    "LineSource",
]


class ErrorReporter:
    """Collect per-source failures without interrupting the run."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self._logger = logger or LOGGER
        self.failures: List[Tuple[str, OSError]] = []

    @property
    def failed(self) -> bool:
        return bool(self.failures)

    def report(self, name: str, error: OSError) -> None:
        message = error.strerror or str(error)
        self._logger.error("%s: %s", name, message)
        self.failures.append((name, error))


def _decode_error() -> OSError:
    return OSError(errno.EILSEQ, os.strerror(errno.EILSEQ))


class InputSet:
    """Ordered input names with at most one open stream at a time."""

    def __init__(
        self,
        names: Sequence[str],
        reporter: Optional[ErrorReporter] = None,
        *,
        stdin: Optional[BinaryIO] = None,
        opener: Optional[Opener] = None,
    ) -> None:
        self._names: Deque[str] = deque(names)
        self.reporter = reporter or ErrorReporter()
        self._stdin = stdin
        self._opener = opener or (lambda name: open(name, "rb"))
        self._stream: Optional[BinaryIO] = None
        self._label: Optional[str] = None

    @property
    def name(self) -> Optional[str]:
        """Label of the active source, as used in error messages."""

        return self._label

    @property
    def exhausted(self) -> bool:
        return self._stream is None and not self._names

    def current(self) -> Optional[BinaryIO]:
        """Return the active stream, opening the next input if needed.

        Inputs that fail to open are reported and dropped.  Returns ``None``
        once every name has been consumed.
        """

        while self._stream is None:
            if not self._names:
                return None
            name = self._names[0]
            if name == STDIN_NAME:
                self._label = STDIN_LABEL
                self._stream = self._stdin if self._stdin is not None else sys.stdin.buffer
            else:
                self._label = name
                try:
                    self._stream = self._opener(name)
                except OSError as exc:
                    self.reporter.report(name, exc)
                    self._names.popleft()
                    self._label = None
                    continue
            LOGGER.debug("reading %s", self._label)
        return self._stream

    def finish(self, error: Optional[OSError] = None) -> None:
        """Close the active stream and advance to the next name.

        ``error`` is the failure that ended the stream, if any.  Standard
        input is left open.
        """

        stream = self._stream
        if stream is None:
            return
        label = self._label or ""
        if error is not None:
            self.reporter.report(label, error)
        is_stdin = self._names and self._names[0] == STDIN_NAME
        if not is_stdin:
            try:
                stream.close()
            except OSError as exc:
                if error is None:
                    self.reporter.report(label, exc)
        LOGGER.debug("finished %s", label)
        self._stream = None
        self._label = None
        self._names.popleft()

    def close(self) -> None:
        """Release the active stream without reporting anything."""

        if self._stream is not None and self._names and self._names[0] != STDIN_NAME:
            self._stream.close()
        self._stream = None


class CharacterSource:
    """Decode characters from an :class:`InputSet` in the configured encoding."""

    def __init__(self, inputs: InputSet, config: DumpConfig) -> None:
        self._inputs = inputs
        self._encoding = config.encoding
        self._accept_raw = config.ignore
        self._decoder: Optional[codecs.IncrementalDecoder] = None
        self._ready: Deque[Token] = deque()
        self._replay = bytearray()
        self._at_eof = False
        self._done = False

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.next()
            if token is END:
                return
            yield token  # type: ignore[misc]

    def next(self) -> "Token | EndOfInput":
        """Return the next token, or :data:`~chd.tokens.END` when exhausted."""

        while True:
            if self._ready:
                return self._ready.popleft()
            if self._done:
                return END
            stream = self._inputs.current()
            if stream is None:
                self._done = True
                return END
            if self._decoder is None:
                self._decoder = codecs.getincrementaldecoder(self._encoding)("strict")
            self._advance(stream)

    def _drop_source(self, error: Optional[OSError] = None) -> None:
        self._inputs.finish(error)
        self._decoder = None
        self._replay.clear()
        self._at_eof = False

    def _advance(self, stream: BinaryIO) -> None:
        """Feed one byte of input to the decoder, queueing what it yields."""

        decoder = self._decoder
        assert decoder is not None
        if self._replay:
            byte = bytes(self._replay[:1])
            del self._replay[:1]
        elif self._at_eof:
            # End of file was already returned once; do not read again.
            byte = b""
        else:
            try:
                byte = stream.read(1)
            except OSError as exc:
                self._drop_source(exc)
                return
        final = not byte
        if final:
            self._at_eof = True
        pending, flag = decoder.getstate()
        try:
            text = decoder.decode(byte, final=final)
        except UnicodeDecodeError:
            bad = bytes(pending) + byte
            if not self._accept_raw:
                LOGGER.debug("invalid sequence %r in %s", bad, self._inputs.name)
                self._drop_source(_decode_error())
                return
            decoder.setstate((b"", flag))
            self._replay[:0] = bad[1:]
            self._ready.append(RawByte(bad[0]))
            return
        self._ready.extend(Char(ord(ch)) for ch in text)
        if final:
            self._drop_source()


class LineSource:
    """Yield text lines across an :class:`InputSet`.

    Lines are decoded with the configured encoding; bytes that do not decode
    are replaced, since only the ASCII hex fields of a dump line are parsed.
    """

    def __init__(self, inputs: InputSet, config: DumpConfig) -> None:
        self._inputs = inputs
        self._encoding = config.encoding

    def __iter__(self) -> Iterator[str]:
        while True:
            line = self.next()
            if line is None:
                return
            yield line

    def next(self) -> Optional[str]:
        """Return the next line, or ``None`` when every input is exhausted."""

        while True:
            stream = self._inputs.current()
            if stream is None:
                return None
            try:
                raw = stream.readline()
            except OSError as exc:
                self._inputs.finish(exc)
                continue
            if raw:
                return raw.decode(self._encoding, errors="replace")
            self._inputs.finish()
