"""Forward and reverse dump drivers."""

from __future__ import annotations

import logging
from typing import BinaryIO, List, Optional, Sequence

from .config import DumpConfig
from .parse import DumpParser
from .render import DumpRenderer
from .source import STDIN_NAME, CharacterSource, ErrorReporter, InputSet, LineSource
from .tokens import END, Token

LOGGER = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1

__all__ = ["EXIT_FAILURE", "EXIT_SUCCESS", "dump", "run", "undump"]


def dump(config: DumpConfig, inputs: InputSet, out: BinaryIO) -> int:
    """Write dump lines for the characters of ``inputs`` to ``out``.

    The first ``config.start`` characters are skipped (but still counted in
    the offset labels) and at most ``config.limit`` characters are rendered.
    Returns the number of characters rendered.
    """

    source = CharacterSource(inputs, config)
    renderer = DumpRenderer(config)
    remaining = config.limit

    pos = 0
    token = None
    while pos < config.start:
        token = source.next()
        if token is END:
            break
        pos += 1

    rendered = 0
    while token is not END and (remaining is None or remaining > 0):
        line: List[Token] = []
        while len(line) < config.count and (remaining is None or remaining > 0):
            token = source.next()
            if token is END:
                break
            line.append(token)  # type: ignore[arg-type]
            if remaining is not None:
                remaining -= 1
        if line:
            text = renderer.render(line, pos)
            out.write(text.encode(config.encoding, errors="replace"))
        pos += len(line)
        rendered += len(line)
    LOGGER.debug("rendered %d characters", rendered)
    return rendered


def undump(config: DumpConfig, inputs: InputSet, out: BinaryIO) -> int:
    """Write the bytes described by the dump lines of ``inputs`` to ``out``.

    The limit is checked before each line, so the line that crosses it is
    still decoded in full.  Returns the number of fields decoded.
    """

    lines = LineSource(inputs, config)
    parser = DumpParser(config)
    remaining = config.limit

    decoded = 0
    while remaining is None or remaining > 0:
        line = lines.next()
        if line is None:
            break
        data, count = parser.parse(line)
        out.write(data)
        decoded += count
        if remaining is not None:
            remaining -= count
    out.write(parser.finalize())
    LOGGER.debug("decoded %d characters", decoded)
    return decoded


def run(
    config: DumpConfig,
    names: Optional[Sequence[str]],
    out: BinaryIO,
    *,
    stdin: Optional[BinaryIO] = None,
    reporter: Optional[ErrorReporter] = None,
) -> int:
    """Run one forward or reverse dump and return the process exit status."""

    reporter = reporter or ErrorReporter()
    inputs = InputSet(list(names) if names else [STDIN_NAME], reporter, stdin=stdin)
    try:
        if config.reverse:
            undump(config, inputs, out)
        else:
            dump(config, inputs, out)
    finally:
        inputs.close()
    out.flush()
    return EXIT_FAILURE if reporter.failed else EXIT_SUCCESS
