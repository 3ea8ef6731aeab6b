"""Run configuration for forward and reverse dumps."""

from __future__ import annotations

import codecs
import locale
import re
from dataclasses import dataclass, field
from typing import Optional

from .exceptions import ConfigError

DEFAULT_COUNT = 8
MAX_COUNT = 255
INT_MAX = 2**31 - 1

# Mirrors strtol(str, &end, 0): optional sign, then hex, octal or decimal.
_NUMBER_RE = re.compile(
    r"\s*(?P<sign>[+-]?)(?:0[xX](?P<hex>[0-9A-Fa-f]+)|(?P<oct>0[0-7]*)|(?P<dec>[1-9][0-9]*))"
)

__all__ = [
    "DEFAULT_COUNT",
    "MAX_COUNT",
    "DumpConfig",
    "locale_encoding",
    "parse_number",
]


def locale_encoding() -> str:
    """Return the codec name of the process's active locale encoding."""

    return codecs.lookup(locale.getpreferredencoding(False)).name


def parse_number(
    text: Optional[str],
    name: str,
    *,
    maximum: int = 0,
    minimum: int = 0,
) -> int:
    """Parse a small non-negative integer option value.

    ``maximum`` of zero means only the ``int`` range applies.  Raises
    :class:`ConfigError` with a message naming the option on failure.
    """

    if text is None or text == "":
        raise ConfigError(f"missing argument for {name}")
    match = _NUMBER_RE.fullmatch(text)
    if match is None:
        raise ConfigError(f"invalid argument '{text}' for {name}")
    if match.group("hex") is not None:
        value = int(match.group("hex"), 16)
    elif match.group("oct") is not None:
        value = int(match.group("oct"), 8)
    else:
        value = int(match.group("dec"), 10)
    if match.group("sign") == "-" and value:
        raise ConfigError(f"invalid argument '{text}' for {name}")
    if value > INT_MAX or value < minimum:
        raise ConfigError(f"invalid argument '{text}' for {name}")
    if maximum and value > maximum:
        raise ConfigError(f"value for {name} too large (maximum {maximum})")
    return value


@dataclass(frozen=True)
class DumpConfig:
    """Settings shared by the source, renderer and parser of one run.

    ``limit`` of ``None`` means unbounded.  ``encoding`` defaults to the
    locale's encoding and is normalised to the codec's canonical name.
    """

    count: int = DEFAULT_COUNT
    ignore: bool = False
    start: int = 0
    limit: Optional[int] = None
    reverse: bool = False
    encoding: str = field(default_factory=locale_encoding)

    def __post_init__(self) -> None:
        if not 1 <= self.count <= MAX_COUNT:
            raise ConfigError(f"count must be between 1 and {MAX_COUNT}, got {self.count}")
        if self.start < 0:
            raise ConfigError(f"start must not be negative, got {self.start}")
        if self.limit is not None and self.limit < 0:
            raise ConfigError(f"limit must not be negative, got {self.limit}")
        try:
            canonical = codecs.lookup(self.encoding).name
        except LookupError as exc:
            raise ConfigError(f"unknown encoding: {self.encoding}") from exc
        object.__setattr__(self, "encoding", canonical)

    @classmethod
    def from_options(
        cls,
        *,
        count: Optional[str] = None,
        ignore: bool = False,
        start: Optional[str] = None,
        limit: Optional[str] = None,
        reverse: bool = False,
        encoding: Optional[str] = None,
    ) -> "DumpConfig":
        """Build a config from raw command line strings."""

        kwargs = {"ignore": ignore, "reverse": reverse}
        if count is not None:
            kwargs["count"] = parse_number(count, "count", maximum=MAX_COUNT, minimum=1)
        if start is not None:
            kwargs["start"] = parse_number(start, "start")
        if limit is not None:
            kwargs["limit"] = parse_number(limit, "limit")
        if encoding is not None:
            kwargs["encoding"] = encoding
        return cls(**kwargs)

    @property
    def glyph_column(self) -> int:
        """Column where the glyph section starts in every rendered line."""

        return 10 + 6 * self.count + 5
