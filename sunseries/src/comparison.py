"""
Comparison of an assembled irradiance series against the clear-sky model.

Evaluates the clear-sky model at every timestamp of an assembled series and
reduces both signals to a small summary: integrated energy, peaks, and the
clearness ratio (measured energy over clear-sky energy).

Energy uses a left-rectangle sum: each sample's value holds until the next
sample, and the final sample counts for one second.

CHANGELOG:
- 2026-10-19: Initial creation

TODO:
- None
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from sunseries.src.models import AssembledSeries
from sunseries.src.solar import clear_sky_irradiance_kw

_SECONDS_PER_HOUR = 3600.0


@dataclass(frozen=True)
class ComparisonSummary:
    """Measured vs clear-sky summary for one assembled series.

    Attributes:
        sample_count: Number of samples compared.
        measured_kwh_m2: Integrated measured irradiance in kWh/m^2.
        clear_sky_kwh_m2: Integrated clear-sky irradiance in kWh/m^2.
        measured_peak_kw_m2: Highest measured value, or None if empty.
        measured_peak_at: Timestamp of the measured peak.
        clear_sky_peak_kw_m2: Highest clear-sky value, or None if empty.
        clear_sky_peak_at: Timestamp of the clear-sky peak.
        clearness_ratio: measured / clear-sky energy, or None when the
            clear-sky energy is zero.
    """

    sample_count: int
    measured_kwh_m2: float
    clear_sky_kwh_m2: float
    measured_peak_kw_m2: float | None
    measured_peak_at: datetime | None
    clear_sky_peak_kw_m2: float | None
    clear_sky_peak_at: datetime | None
    clearness_ratio: float | None


def clear_sky_series(
    timestamps: list[datetime],
    latitude_deg: float,
    longitude_deg: float,
) -> list[float]:
    """Return the clamped clear-sky irradiance (kW/m^2) for each timestamp."""
    return [clear_sky_irradiance_kw(ts, latitude_deg, longitude_deg) for ts in timestamps]


def _durations_s(timestamps: list[datetime]) -> list[float]:
    """Seconds each sample holds for: gap to the next sample, 1s for the last."""
    durations = [
        max(0.0, (nxt - cur).total_seconds())
        for cur, nxt in zip(timestamps, timestamps[1:])
    ]
    if timestamps:
        durations.append(1.0)
    return durations


def _peak(timestamps: list[datetime], values: list[float]) -> tuple[float | None, datetime | None]:
    if not values:
        return None, None
    idx = max(range(len(values)), key=values.__getitem__)
    return values[idx], timestamps[idx]


def compare_series(
    series: AssembledSeries,
    latitude_deg: float,
    longitude_deg: float,
) -> ComparisonSummary:
    """Summarize *series* against the clear-sky model at the given site."""
    timestamps, measured = series
    clear = clear_sky_series(timestamps, latitude_deg, longitude_deg)
    durations = _durations_s(timestamps)

    measured_kwh = sum(q * d for q, d in zip(measured, durations)) / _SECONDS_PER_HOUR
    clear_kwh = sum(q * d for q, d in zip(clear, durations)) / _SECONDS_PER_HOUR

    measured_peak, measured_peak_at = _peak(timestamps, measured)
    clear_peak, clear_peak_at = _peak(timestamps, clear)

    return ComparisonSummary(
        sample_count=len(timestamps),
        measured_kwh_m2=measured_kwh,
        clear_sky_kwh_m2=clear_kwh,
        measured_peak_kw_m2=measured_peak,
        measured_peak_at=measured_peak_at,
        clear_sky_peak_kw_m2=clear_peak,
        clear_sky_peak_at=clear_peak_at,
        clearness_ratio=measured_kwh / clear_kwh if clear_kwh > 0 else None,
    )
