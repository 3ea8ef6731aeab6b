"""Command line entry point for the codepoint dumper."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import BinaryIO, Optional, Sequence

from . import __version__
from .config import DumpConfig
from .dump import EXIT_FAILURE, run
from .exceptions import ConfigError

LOGGER = logging.getLogger("chd")

DESCRIPTION = """\
Output a representation of the contents of FILENAME as character
codepoints, similar to xxd but Unicode-aware. With multiple arguments,
the files' contents are concatenated together. With no arguments, or
when FILENAME is -, read from standard input."""

VERSION_TEXT = f"""\
chd: v{__version__}
Copyright (C) 2013-2017 by Brian Raiter <breadbox@muppetlabs.com>
This is free software; you are free to change and redistribute it.
There is NO WARRANTY, to the extent permitted by law."""

__all__ = ["build_parser", "main"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chd",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("filenames", nargs="*", metavar="FILENAME")
    parser.add_argument(
        "-c", "--count", metavar="N", help="Display N characters per line [default=8]"
    )
    parser.add_argument(
        "-i",
        "--ignore",
        action="store_true",
        help="Treat invalid characters as individual bytes",
    )
    parser.add_argument("-s", "--start", metavar="N", help="Start N characters after start of input")
    parser.add_argument("-l", "--limit", metavar="N", help="Stop after N characters of input")
    parser.add_argument(
        "-r",
        "--reverse",
        action="store_true",
        help="Reverse operation: convert dump output to chars",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log progress details to stderr"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=VERSION_TEXT,
        help="Display version information and exit",
    )
    return parser


def main(
    argv: Optional[Sequence[str]] = None,
    *,
    stdin: Optional[BinaryIO] = None,
    stdout: Optional[BinaryIO] = None,
) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )

    try:
        config = DumpConfig.from_options(
            count=args.count,
            ignore=args.ignore,
            start=args.start,
            limit=args.limit,
            reverse=args.reverse,
        )
    except ConfigError as exc:
        LOGGER.error("%s", exc)
        return EXIT_FAILURE

    out = stdout if stdout is not None else sys.stdout.buffer
    try:
        return run(config, args.filenames, out, stdin=stdin)
    except BrokenPipeError:
        # The reader went away (e.g. `chd big.txt | head`); stop quietly.
        if stdout is None:
            devnull = os.open(os.devnull, os.O_WRONLY)
            os.dup2(devnull, sys.stdout.fileno())
        return EXIT_FAILURE


if __name__ == "__main__":  # pragma: no cover - CLI wrapper
    raise SystemExit(main())
