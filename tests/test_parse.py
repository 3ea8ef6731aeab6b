from __future__ import annotations

import pytest

from chd.config import DumpConfig
from chd.exceptions import ConversionStateError
from chd.parse import ConversionState, DumpParser, parse_dump_line


def _line(*fields: str, count: int = 8, glyphs: str = "") -> str:
    padding = " " * (6 * (count - len(fields)) + 5)
    return "00000000: " + "".join(fields) + padding + glyphs + "\n"


def _parser(encoding: str = "utf-8", count: int = 8) -> DumpParser:
    return DumpParser(DumpConfig(count=count, encoding=encoding, reverse=True))


def test_parses_codepoint_fields() -> None:
    line = _line("    41", "    42", "  2603", glyphs="A B ☃ ")
    assert _parser().parse(line) == ("AB☃".encode("utf-8"), 3)


def test_glyphs_of_a_short_line_are_not_fields() -> None:
    # "A" and "B" are hex digits; they must not be read back as codepoints.
    line = _line("    41", "    42", glyphs="A B ")
    assert _parser().parse(line) == (b"AB", 2)


def test_raw_byte_field() -> None:
    line = _line("    41", "   *FF", glyphs="A � ")
    assert _parser().parse(line) == (b"A\xff", 2)


def test_line_without_space_contributes_nothing() -> None:
    assert _parser().parse("garbage\n") == (b"", 0)
    assert _parser().parse("") == (b"", 0)


def test_parsing_stops_at_first_unrecognised_field() -> None:
    line = "00000000:     41    zz    42\n"
    assert _parser().parse(line) == (b"A", 1)


def test_lowercase_hex_is_accepted() -> None:
    assert _parser().parse(_line("    6a", "   *fe")) == (b"j\xfe", 2)


def test_full_line_stops_after_linesize_fields() -> None:
    fields = ["    31"] * 4
    line = _line(*fields, count=4, glyphs="1 1 1 1 ")
    assert _parser(count=4).parse(line) == (b"1111", 4)


def test_label_is_not_validated() -> None:
    assert _parser().parse("x     41\n") == (b"A", 1)


@pytest.mark.parametrize("field", ["  D800", "110000", "FFFFFF"])
def test_unencodable_codepoint_becomes_replacement(field: str) -> None:
    assert _parser().parse(_line(field)) == ("�".encode("utf-8"), 1)


def test_replacement_falls_back_to_question_mark() -> None:
    assert _parser(encoding="latin-1").parse(_line("  2603", "    E9")) == (b"?\xe9", 2)


def test_conversion_state_persists_across_lines() -> None:
    parser = _parser(encoding="iso2022_jp")
    first, _ = parser.parse(_line("  65E5"))
    second, _ = parser.parse(_line("  672C", "    61"))
    trailer = parser.finalize()
    assert first + second + trailer == "日本a".encode("iso2022_jp")
    assert first == b"\x1b$BF|"
    assert trailer == b""


def test_finalize_returns_to_initial_shift_state() -> None:
    parser = _parser(encoding="iso2022_jp")
    data, count = parser.parse(_line("  65E5", "  672C"))
    assert count == 2
    trailer = parser.finalize()
    assert trailer == b"\x1b(B"
    assert data + trailer == "日本".encode("iso2022_jp")


def test_raw_byte_inside_shifted_text_resets_state_first() -> None:
    state = ConversionState("iso2022_jp")
    data, _ = parse_dump_line(_line("  65E5", "   *80"), state, 8)
    assert data == b"\x1b$BF|\x1b(B\x80"


def test_finalize_is_single_use() -> None:
    state = ConversionState("utf-8")
    assert state.finalize() == b""
    assert state.finalized
    with pytest.raises(ConversionStateError):
        state.finalize()
    with pytest.raises(ConversionStateError):
        state.encode_codepoint(0x41)


def test_count_must_match_the_dump() -> None:
    four_wide = "00000000:     41    42    43    44     A B C D \n"
    assert _parser(count=4).parse(four_wide) == (b"ABCD", 4)
    # Parsed eight wide, the glyph column's leading "     A" reads as U+000A.
    assert _parser(count=8).parse(four_wide) == (b"ABCD\n", 5)
