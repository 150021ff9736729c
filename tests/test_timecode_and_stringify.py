from __future__ import annotations

from chunk_audio.util.timecode import format_number, round_half_up, stringify_trim


def test_stringify_trim_microseconds() -> None:
    assert stringify_trim(0.25) == "250000us"
    assert stringify_trim(10) == "10000000us"
    assert stringify_trim(0) == "0us"


def test_stringify_trim_rounding_residue_is_zero() -> None:
    # would otherwise print as scientific notation
    assert stringify_trim(6e-13) == "0us"
    assert stringify_trim(5e-7) == "0us"
    assert stringify_trim(-0.0) == "0us"
    assert stringify_trim(-9e-7) == "0us"


def test_stringify_trim_keeps_fraction_without_exponent() -> None:
    s = stringify_trim(1 / 3)
    assert s.startswith("333333.333")
    assert s.endswith("us")
    assert "e" not in s[:-2]


def test_stringify_trim_is_idempotent() -> None:
    for v in (0.0, 1 / 3, 2.5, 123.456789, 1e-9):
        assert stringify_trim(v) == stringify_trim(v)


def test_format_number_and_rounding() -> None:
    assert format_number(2.0) == "2"
    assert format_number(1.5) == "1.5"
    assert format_number(-0.0) == "0"

    assert round_half_up(2.5) == 3
    assert round_half_up(0.4) == 0
    assert round_half_up(-0.5) == 0
    assert round_half_up(95999.6) == 96000
