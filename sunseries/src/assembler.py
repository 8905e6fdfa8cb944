"""
Day-by-day assembly of a per-second irradiance series for a requested window.

For each calendar day from the window's start day the assembler obtains the
day's samples through the fetcher (cache first), sorts them, pads the day's
edges with zero-irradiance synthetic samples, appends the day to the running
series, and stops once the series passes the window's last instant.

Gap-filling policy:
- A day without any record becomes 86400 synthetic samples,
  00:00:00 through 23:59:59.
- Otherwise every whole second from local midnight up to (not including) the
  first record, and every whole second after the last record up to and
  including the following local midnight, gets a synthetic sample.
- Missing seconds between the first and last record of a day are left as
  they are. Downstream comparisons depend on the resulting per-day sample
  counts, so interior gaps must stay unfilled.

Because a padded day ends on the following midnight and the next day starts
on it, a multi-day series may contain that midnight twice. Duplicates are kept.

Operations:
- assemble(start, span_days): Build the series for one window.
- load_series(start, span_days, settings): Synchronous convenience wrapper.
- fill_day(day, samples): Pure edge-padding of one sorted day.

CHANGELOG:
- 2026-10-19: Initial creation
- 2026-10-19: Fetch through the last instant's day when the window starts after midnight

TODO:
- None
"""

from __future__ import annotations

import asyncio
import logging
import time
from datetime import date, datetime, timedelta
from typing import TYPE_CHECKING

from sunseries.src.models import AssembledSeries, RequestWindow, Sample
from sunseries.src.timeconv import local_midnight

if TYPE_CHECKING:
    from sunseries.src.config import SeriesSettings
    from sunseries.src.fetcher import RemoteSeriesFetcher

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 86400
_ONE_SECOND = timedelta(seconds=1)
_ONE_MICROSECOND = timedelta(microseconds=1)


# ---------------------------------------------------------------------------
# Pure gap-filling helpers
# ---------------------------------------------------------------------------


def synthetic_samples(start: datetime, count: int) -> list[Sample]:
    """Return *count* synthetic samples one second apart from *start*."""
    return [Sample.synthetic_at(start + timedelta(seconds=i)) for i in range(count)]


def fill_day(day: date | datetime, samples: list[Sample]) -> list[Sample]:
    """Pad the edges of one day's sorted samples with synthetic samples.

    Args:
        day: The local calendar day the samples belong to.
        samples: The day's real samples, sorted by timestamp.

    Returns:
        A new list: leading synthetic samples, the real samples unchanged,
        then trailing synthetic samples. An empty input yields a full day of
        synthetic samples.

    The leading pad holds every whole second strictly before the first
    record. A first record with a fractional second therefore gets one more
    leading sample than its truncated offset: a first record at 08:00:00.5
    is preceded by 28801 synthetic samples (00:00:00 through 08:00:00), not
    28800. Whole-second records are unaffected.
    """
    midnight = local_midnight(day)
    if not samples:
        return synthetic_samples(midnight, SECONDS_PER_DAY)

    first = samples[0].timestamp
    last = samples[-1].timestamp

    # Whole seconds t with midnight <= t < first.
    lead_us = (first - midnight) // _ONE_MICROSECOND
    lead_count = max(0, -(-lead_us // 1_000_000))

    # Whole seconds t with last < t <= next midnight.
    last_offset_s = (last - midnight) // _ONE_SECOND
    trail_start = max(0, last_offset_s + 1)
    trail_count = max(0, SECONDS_PER_DAY - trail_start + 1)

    return (
        synthetic_samples(midnight, lead_count)
        + samples
        + synthetic_samples(midnight + timedelta(seconds=trail_start), trail_count)
    )


# ---------------------------------------------------------------------------
# Assembler
# ---------------------------------------------------------------------------


class SeriesAssembler:
    """Builds an AssembledSeries by walking the window one day at a time.

    Days are processed strictly in sequence; at most one remote query is
    outstanding at any time.

    Args:
        fetcher: Source of per-day samples (a RemoteSeriesFetcher or any
            object with an async ``fetch(day)`` returning ``list[Sample]``).
    """

    def __init__(self, fetcher: RemoteSeriesFetcher) -> None:
        self._fetcher = fetcher

    async def assemble(self, start: datetime, span_days: float) -> AssembledSeries:
        """Assemble the series for ``span_days`` days starting at *start*.

        The last instant is anchored on the first sample at or after *start*
        and is inclusive. A window starting at local midnight fetches at most
        ``max(1, ceil(span_days))`` days. A later start also fetches every
        day up to the one holding the last instant. The loop stops early on
        the day that crosses the last instant.

        Raises:
            ValueError: If *span_days* is negative or not finite.
            TransportError: On remote query failure (no partial result).
            CacheCorruptError: If a cached day cannot be parsed.
            ConfigMissingError: If credentials are not configured.
        """
        window = RequestWindow(start=start, span=span_days)
        started = time.perf_counter()

        timestamps: list[datetime] = []
        values: list[float] = []
        last_dt: datetime | None = None
        first_day = window.start.date()
        day_limit = window.day_count

        offset = 0
        while offset < day_limit:
            day = first_day + timedelta(days=offset)
            offset += 1
            day_samples = await self._load_day(day)

            if last_dt is None:
                day_samples = [s for s in day_samples if s.timestamp >= window.start]
                anchor = day_samples[0].timestamp if day_samples else window.start
                last_dt = anchor + window.span_delta
                if window.start != local_midnight(window.start):
                    day_limit = max(day_limit, (last_dt.date() - first_day).days + 1)
                logger.info(
                    "Assembling %s -> %s (requested end %s, up to %d days)",
                    anchor,
                    last_dt,
                    window.end,
                    day_limit,
                    extra={"day": day, "last_instant": last_dt},
                )

            dts = [s.timestamp for s in day_samples]
            qs = [s.irradiance for s in day_samples]

            if any(dt > last_dt for dt in dts):
                mask = [dt <= last_dt for dt in dts]
                timestamps.extend(dt for dt, keep in zip(dts, mask) if keep)
                values.extend(q for q, keep in zip(qs, mask) if keep)
                logger.debug(
                    "Reached last instant on %s",
                    day,
                    extra={"day": day, "last_instant": last_dt},
                )
                break

            timestamps.extend(dts)
            values.extend(qs)

        logger.info(
            "Assembled %d samples in %.3fs",
            len(timestamps),
            time.perf_counter() - started,
        )
        return AssembledSeries(timestamps=timestamps, values=values)

    async def _load_day(self, day: date) -> list[Sample]:
        """Fetch, sort, and edge-pad one calendar day."""
        records = await self._fetcher.fetch(day)
        records = sorted(records, key=lambda s: s.timestamp)
        filled = fill_day(day, records)
        synthetic_count = sum(1 for s in filled if s.synthetic)
        context = {
            "day": day,
            "real_count": len(filled) - synthetic_count,
            "synthetic_count": synthetic_count,
        }

        if records:
            logger.info(
                "Day %s: real records %s .. %s",
                day,
                records[0].timestamp,
                records[-1].timestamp,
                extra=context,
            )
        else:
            logger.warning("Day %s: no records, filled with synthetic samples", day, extra=context)
        return filled


def load_series(
    start: datetime,
    span_days: float,
    settings: SeriesSettings | None = None,
) -> AssembledSeries:
    """Synchronously assemble a series using the configured store and cache.

    Args:
        start: First instant of the window (naive local time).
        span_days: Window length in days, fractional allowed.
        settings: Configuration; loaded from the environment when omitted.
    """
    from sunseries.src.config import SeriesSettings
    from sunseries.src.fetcher import RemoteSeriesFetcher

    if settings is None:
        settings = SeriesSettings()
    assembler = SeriesAssembler(RemoteSeriesFetcher(settings))
    return asyncio.run(assembler.assemble(start, span_days))
