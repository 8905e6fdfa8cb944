"""
Unit tests for JPtime helpers.

CHANGELOG:
- 2026-10-19: Initial creation

TODO:
- None
"""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta, timezone

import pytest
from sunseries.src.timeconv import (
    format_jptime,
    local_midnight,
    parse_jptime,
    store_range_for_day,
    wall_clock_as_utc,
)


class TestParseAndFormat:
    def test_parse_whole_seconds(self) -> None:
        assert parse_jptime("2022-09-28T08:15:30") == datetime(2022, 9, 28, 8, 15, 30)

    def test_parse_fraction(self) -> None:
        assert parse_jptime("2022-09-28T08:15:30.123") == datetime(
            2022, 9, 28, 8, 15, 30, 123000
        )

    def test_parse_drops_offset_keeps_digits(self) -> None:
        assert parse_jptime("2022-09-28T08:15:30+00:00") == datetime(2022, 9, 28, 8, 15, 30)

    def test_parse_rejects_garbage(self) -> None:
        with pytest.raises(ValueError):
            parse_jptime("yesterday")

    def test_format_has_microseconds(self) -> None:
        assert format_jptime(datetime(2022, 9, 28, 8, 0, 1, 5)) == "2022-09-28T08:00:01.000005"


class TestDayBoundaries:
    def test_local_midnight_from_datetime(self) -> None:
        assert local_midnight(datetime(2022, 9, 28, 17, 4)) == datetime(2022, 9, 28)

    def test_local_midnight_from_date(self) -> None:
        assert local_midnight(date(2022, 9, 28)) == datetime(2022, 9, 28)

    def test_store_range_is_local_wall_clock(self) -> None:
        assert store_range_for_day(datetime(2022, 12, 31, 9)) == (
            "2022-12-31T00:00:00",
            "2023-01-01T00:00:00",
        )


class TestWallClockAsUtc:
    def test_naive_digits_kept(self) -> None:
        result = wall_clock_as_utc(datetime(2022, 9, 28, 9, 30))
        assert result.tzinfo is UTC
        assert (result.hour, result.minute) == (9, 30)

    def test_aware_offset_replaced_not_converted(self) -> None:
        jst = timezone(timedelta(hours=9))
        result = wall_clock_as_utc(datetime(2022, 9, 28, 9, 30, tzinfo=jst))
        assert result.hour == 9
        assert result.utcoffset() == timedelta(0)
