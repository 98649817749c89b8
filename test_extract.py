import pytest

from holes.extract import extract_timestamp, parse_rfc3339_ms
from holes.types import ParseFailure, SkipReason


NEW_YEAR_2021_MS = 1609459200000


def test_extracts_utc_timestamp():
    assert extract_timestamp("[2021-01-01T00:00:00Z] a") == NEW_YEAR_2021_MS


def test_offset_is_applied():
    assert extract_timestamp("[2021-01-01T02:00:00+02:00] a") == NEW_YEAR_2021_MS
    assert extract_timestamp("[2020-12-31T19:00:00-05:00] a") == NEW_YEAR_2021_MS


def test_lowercase_z_is_utc():
    assert extract_timestamp("[2021-01-01T00:00:00z] a") == NEW_YEAR_2021_MS


def test_fractional_seconds_are_floored_to_ms():
    assert extract_timestamp("[2021-01-01T00:00:00.123999Z] a") == NEW_YEAR_2021_MS + 123


@pytest.mark.parametrize(
    "fraction, ms",
    [
        ("2", 200),
        ("25", 250),
        ("250", 250),
        ("2509", 250),
        ("123456789", 123),
    ],
)
def test_fractions_of_any_length(fraction, ms):
    line = f"[2021-01-01T00:00:00.{fraction}Z] a"

    assert extract_timestamp(line) == NEW_YEAR_2021_MS + ms


def test_leap_second_rolls_into_next_minute():
    assert extract_timestamp("[2020-12-31T23:59:60Z] leap") == NEW_YEAR_2021_MS
    assert extract_timestamp("[2020-12-31T23:59:60.5Z] leap") == NEW_YEAR_2021_MS + 500


def test_space_and_lowercase_separators():
    assert extract_timestamp("[2021-01-01 00:00:00Z] a") == NEW_YEAR_2021_MS
    assert extract_timestamp("[2021-01-01t00:00:00Z] a") == NEW_YEAR_2021_MS


def test_before_epoch_is_negative():
    assert extract_timestamp("[1969-12-31T23:59:59.999500Z] x") == -1


def test_other_years_are_accepted():
    assert extract_timestamp("[2024-02-29T12:00:00Z] leap") == 1709208000000


def test_text_after_bracket_is_ignored():
    assert extract_timestamp("[2021-01-01T00:00:00Z]") == NEW_YEAR_2021_MS
    assert extract_timestamp("[2021-01-01T00:00:00Z]x]y") == NEW_YEAR_2021_MS


@pytest.mark.parametrize(
    "line",
    [
        "",
        "[",
        "]",
        "no timestamp here",
        " [2021-01-01T00:00:00Z] leading space",
        "[2021-01-01T00:00:00Z truncated",
        "[] empty",
        "[INFO] not a date",
        "2021-01-01T00:00:00Z no brackets",
        "[\u0662\u0660\u0662\u0661-01-01T00:00:00Z] arabic-indic digits",
    ],
)
def test_unmatched_lines(line):
    result = extract_timestamp(line)

    assert isinstance(result, ParseFailure)
    assert result.reason is SkipReason.UNMATCHED
    assert result.raw == line


@pytest.mark.parametrize(
    "line",
    [
        "[2021-13-45T00:00:00Z] bad month",
        "[2021-01-01T00:00:00] no offset",
        "[2021-01-01] date only",
        "[2021-xx] garbage",
        "[2021-01-01T25:00:00Z] bad hour",
        "[2021-01-01T00:00Z] no seconds",
        "[2021-01-01T00Z] hour only",
        "[2021-W01-1T00:00:00Z] week date",
        "[2021-01-01X00:00:00Z] bad separator",
        "[2021-01-01T00:00:00+0200] offset without colon",
        "[2021-01-01T00:00:00+24:00] offset too large",
        "[2021-01-01T00:00:00.Z] empty fraction",
    ],
)
def test_malformed_timestamps(line):
    result = extract_timestamp(line)

    assert isinstance(result, ParseFailure)
    assert result.reason is SkipReason.MALFORMED
    assert result.detail


def test_parse_rejects_naive_datetime():
    with pytest.raises(ValueError, match="RFC-3339"):
        parse_rfc3339_ms("2021-01-01T00:00:00")
