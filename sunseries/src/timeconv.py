"""
JPtime helpers: parsing, formatting, and the store's clock-labeling convention.

All telemetry timestamps are naive local civil times ("JPtime"). The
Elasticsearch index was populated with JST wall-clock values stored as if they
were UTC, so range queries must send the local wall clock verbatim, and the
clear-sky model reads hour/minute/second straight off the wall clock. Both
uses go through this module so the convention can be corrected in one place
if the upstream labeling is ever fixed.

CHANGELOG:
- 2026-10-19: Initial creation

TODO:
- None
"""

from __future__ import annotations

from datetime import UTC, date, datetime, time, timedelta

JPTIME_FORMAT = "%Y-%m-%dT%H:%M:%S.%f"
"""Format used when writing JPtime strings (microsecond precision)."""

STORE_QUERY_FORMAT = "%Y-%m-%dT%H:%M:%S"
"""Format of the literal range bounds sent to the store."""


def parse_jptime(value: str) -> datetime:
    """Parse a JPtime string into a naive datetime.

    Accepts ``YYYY-MM-DDTHH:MM:SS`` with an optional fractional part of any
    precision up to microseconds.

    Raises:
        ValueError: If *value* is not a valid JPtime string.
    """
    dt = datetime.fromisoformat(value)
    if dt.tzinfo is not None:
        # JPtime is a wall clock; any offset in the document is a labeling
        # artifact and is discarded.
        dt = dt.replace(tzinfo=None)
    return dt


def format_jptime(dt: datetime) -> str:
    """Format a naive datetime as a JPtime string."""
    return dt.strftime(JPTIME_FORMAT)


def local_midnight(day: date | datetime) -> datetime:
    """Return 00:00:00 of the calendar day containing *day*."""
    if isinstance(day, datetime):
        day = day.date()
    return datetime.combine(day, time())


def store_range_for_day(day: date | datetime) -> tuple[str, str]:
    """Return the ``[gte, lt)`` range bounds for one local calendar day.

    The bounds are local midnight to the following local midnight, written
    as literal strings without any UTC conversion because the store holds
    local wall-clock values labeled as UTC.
    """
    start = local_midnight(day)
    end = start + timedelta(days=1)
    return start.strftime(STORE_QUERY_FORMAT), end.strftime(STORE_QUERY_FORMAT)


def wall_clock_as_utc(dt: datetime) -> datetime:
    """Reinterpret the wall-clock digits of *dt* at a zero UTC offset.

    The digits are kept unchanged; only the tzinfo is replaced. Aware inputs
    lose their original offset.
    """
    return dt.replace(tzinfo=UTC)
