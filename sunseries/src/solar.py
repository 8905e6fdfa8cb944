"""
Closed-form clear-sky irradiance model.

Computes the theoretical extraterrestrial irradiance on a horizontal surface
from the day of year, the site coordinates, and the wall-clock time. Solar
declination, the Earth-Sun distance factor, and the equation of time come from
Spencer's Fourier series; the hour angle is measured against the 135 degE
reference meridian of the JPtime clock.

Pure functions: no I/O, no clock, no randomness. Identical inputs give
bit-identical outputs.

CHANGELOG:
- 2026-10-19: Initial creation

TODO:
- None
"""

from __future__ import annotations

import math
from datetime import datetime

from sunseries.src.timeconv import wall_clock_as_utc

SOLAR_CONSTANT_W_M2 = 1367.0
"""Solar constant in W/m^2."""

REFERENCE_MERIDIAN_DEG = 135.0
"""Longitude of the meridian that defines JPtime (JST)."""


def day_of_year(timestamp: datetime) -> int:
    """Return the 1-based day of year of *timestamp*'s wall clock."""
    new_year = timestamp.replace(month=1, day=1, hour=0, minute=0, second=0, microsecond=0)
    return (timestamp - new_year).days + 1


def clear_sky_irradiance(
    timestamp: datetime,
    latitude_deg: float,
    longitude_deg: float,
) -> float:
    """Return the clear-sky irradiance in W/m^2 (signed).

    Negative values mean the sun is below the horizon.

    Args:
        timestamp: Local wall-clock time. Any tzinfo is ignored; only the
            digits are used.
        latitude_deg: Site latitude in degrees (north positive).
        longitude_deg: Site longitude in degrees (east positive).
    """
    wall = wall_clock_as_utc(timestamp)

    dn = day_of_year(wall)
    theta = 2.0 * math.pi * (dn - 1) / 365.0
    theta_2x = 2.0 * theta
    theta_3x = 3.0 * theta

    # Solar declination (radians).
    delta = (
        0.006918
        - 0.399912 * math.cos(theta)
        + 0.070257 * math.sin(theta)
        - 0.006758 * math.cos(theta_2x)
        + 0.000907 * math.sin(theta_2x)
        - 0.002697 * math.cos(theta_3x)
        + 0.001480 * math.sin(theta_3x)
    )

    # Squared inverse Earth-Sun distance ratio.
    distance_factor = (
        1.000110
        + 0.034221 * math.cos(theta)
        + 0.001280 * math.sin(theta)
        + 0.000719 * math.cos(theta_2x)
        + 0.000077 * math.sin(theta_2x)
    )

    # Equation of time (radians).
    eq = (
        0.000075
        + 0.001868 * math.cos(theta)
        - 0.032077 * math.sin(theta)
        - 0.014615 * math.cos(theta_2x)
        - 0.040849 * math.sin(theta_2x)
    )

    phi = latitude_deg * math.pi / 180.0
    lng_diff = (longitude_deg - REFERENCE_MERIDIAN_DEG) / 180.0 * math.pi

    hours = wall.hour + wall.minute / 60.0 + wall.second / 3600.0
    h = (hours - 12.0) / 12.0 * math.pi + lng_diff + eq

    sin_alpha = math.sin(phi) * math.sin(delta) + math.cos(phi) * math.cos(delta) * math.cos(h)

    return SOLAR_CONSTANT_W_M2 * distance_factor * sin_alpha


def clear_sky_irradiance_kw(
    timestamp: datetime,
    latitude_deg: float,
    longitude_deg: float,
) -> float:
    """Return the clear-sky irradiance in kW/m^2, clamped at zero."""
    return max(0.0, clear_sky_irradiance(timestamp, latitude_deg, longitude_deg)) / 1000.0
