from datetime import datetime, timedelta, timezone

from vaul.domain.time_utils import format_timestamp, parse_timestamp


def test_parse_truncates_nanoseconds_and_handles_zulu():
    parsed = parse_timestamp("2024-01-02T03:04:05.987654321Z")

    assert parsed == datetime(2024, 1, 2, 3, 4, 5, 987654, tzinfo=timezone.utc)


def test_parse_keeps_offsets_and_assumes_utc_for_naive():
    with_offset = parse_timestamp("2024-01-02T03:04:05+02:00")
    naive = parse_timestamp("2024-01-02 03:04:05")

    assert with_offset.utcoffset() == timedelta(hours=2)
    assert naive.tzinfo == timezone.utc


def test_parse_invalid_or_blank_returns_none():
    assert parse_timestamp("") is None
    assert parse_timestamp(None) is None
    assert parse_timestamp("yesterday") is None


def test_format_timestamp_blank_for_none():
    assert format_timestamp(None) == ""
    stamp = datetime(2024, 1, 2, tzinfo=timezone.utc)
    assert parse_timestamp(format_timestamp(stamp)) == stamp
