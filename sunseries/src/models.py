"""
Data model for irradiance telemetry samples and assembly requests.

Defines the Sample model parsed from raw Elasticsearch hits, the immutable
RequestWindow describing one assembly call, and the AssembledSeries result
returned to callers.

CHANGELOG:
- 2026-10-19: Initial creation
- 2026-10-19: Reject hits whose _source is not an object

TODO:
- None
"""

from __future__ import annotations

import math
from datetime import datetime, timedelta
from typing import Any, NamedTuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from sunseries.src.timeconv import parse_jptime

TIMESTAMP_FIELD = "JPtime"
"""Document field holding the local civil timestamp."""

IRRADIANCE_FIELD = "solarIrradiance(kw/m^2)"
"""Document field holding the measured irradiance in kW/m^2."""


class Sample(BaseModel):
    """A single irradiance reading.

    Attributes:
        timestamp: Naive local civil time of the reading.
        irradiance: Measured irradiance in kW/m^2 (0.0 for synthetic samples).
        synthetic: True when the sample was manufactured to pad a missing
            span at a day's edge. Synthetic samples are never persisted.
        sensor_fields: Other sensor fields from the source document, carried as-is.
    """

    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    irradiance: float
    synthetic: bool = False
    sensor_fields: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_hit(cls, hit: dict[str, Any]) -> Sample:
        """Build a Sample from one raw search hit.

        Raises:
            KeyError: If ``_source``, ``JPtime`` or the irradiance field is
                missing.
            TypeError: If ``_source`` is not a JSON object.
            ValueError: If the timestamp or irradiance cannot be converted.
        """
        source = hit["_source"]
        if not isinstance(source, dict):
            raise TypeError(f"_source must be an object, got {type(source).__name__}")
        extra = {
            key: value
            for key, value in source.items()
            if key not in (TIMESTAMP_FIELD, IRRADIANCE_FIELD)
        }
        return cls(
            timestamp=parse_jptime(source[TIMESTAMP_FIELD]),
            irradiance=source[IRRADIANCE_FIELD],
            sensor_fields=extra,
        )

    @classmethod
    def synthetic_at(cls, timestamp: datetime) -> Sample:
        """Return a zero-irradiance placeholder for *timestamp*."""
        # model_construct skips validation; a full day needs 86400 of these.
        return cls.model_construct(
            timestamp=timestamp,
            irradiance=0.0,
            synthetic=True,
            sensor_fields={},
        )


class RequestWindow(BaseModel):
    """The time window requested from the assembler.

    ``span`` is in days and may be fractional. The fractional part is
    converted to whole hours (truncated), so ``span=1.5`` means one day and
    twelve hours.
    """

    model_config = ConfigDict(frozen=True)

    start: datetime
    span: float

    @field_validator("span")
    @classmethod
    def span_must_be_non_negative(cls, v: float) -> float:
        """Reject negative and non-finite spans."""
        if not math.isfinite(v) or v < 0:
            raise ValueError("span must be a finite number of days >= 0")
        return v

    @property
    def span_delta(self) -> timedelta:
        """Span as a timedelta: whole days plus truncated whole hours."""
        fractional, whole = math.modf(self.span)
        return timedelta(days=int(whole), hours=int(fractional * 24))

    @property
    def end(self) -> datetime:
        """Requested end instant (inclusive)."""
        return self.start + self.span_delta

    @property
    def day_count(self) -> int:
        """Maximum number of calendar days fetched; at least one."""
        return max(1, math.ceil(self.span))


class AssembledSeries(NamedTuple):
    """Equal-length timestamp and irradiance sequences for a window."""

    timestamps: list[datetime]
    values: list[float]
