from __future__ import annotations

import locale

import pytest

from chd.config import DumpConfig, parse_number
from chd.exceptions import ConfigError


@pytest.mark.parametrize(
    "text, expected",
    [("12", 12), ("0x1F", 31), ("010", 8), ("0", 0), (" 7", 7), ("+3", 3), ("-0", 0)],
)
def test_parse_number_accepts_c_style_literals(text: str, expected: int) -> None:
    assert parse_number(text, "start") == expected


@pytest.mark.parametrize("text", ["-1", "12a", "0x", "08", "1.5", "2147483648", "ten"])
def test_parse_number_rejects_invalid_values(text: str) -> None:
    with pytest.raises(ConfigError) as excinfo:
        parse_number(text, "limit")
    assert str(excinfo.value) == f"invalid argument '{text}' for limit"


def test_parse_number_reports_missing_argument() -> None:
    with pytest.raises(ConfigError, match="missing argument for start"):
        parse_number("", "start")


def test_parse_number_enforces_maximum() -> None:
    assert parse_number("255", "count", maximum=255) == 255
    with pytest.raises(ConfigError, match=r"value for count too large \(maximum 255\)"):
        parse_number("256", "count", maximum=255)


def test_from_options_rejects_zero_count() -> None:
    with pytest.raises(ConfigError, match="invalid argument '0' for count"):
        DumpConfig.from_options(count="0", encoding="utf-8")


def test_from_options_defaults() -> None:
    config = DumpConfig.from_options(encoding="utf-8")
    assert config.count == 8
    assert config.ignore is False
    assert config.start == 0
    assert config.limit is None
    assert config.reverse is False


def test_encoding_defaults_to_locale(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(locale, "getpreferredencoding", lambda do_setlocale=True: "latin-1")
    assert DumpConfig().encoding == "iso8859-1"


def test_unknown_encoding_is_a_config_error() -> None:
    with pytest.raises(ConfigError, match="unknown encoding"):
        DumpConfig(encoding="no-such-codec")


@pytest.mark.parametrize("count, column", [(1, 21), (8, 63), (255, 1545)])
def test_glyph_column(count: int, column: int) -> None:
    assert DumpConfig(count=count, encoding="utf-8").glyph_column == column
