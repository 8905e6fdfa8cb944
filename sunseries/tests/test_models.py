"""
Unit tests for the Sample and RequestWindow models.

Tests verify:
- Samples parse from raw hits, keeping extra sensor fields.
- Synthetic samples are zero-valued and flagged.
- RequestWindow end and day count follow the span rules.
- Negative or non-finite spans are rejected.

CHANGELOG:
- 2026-10-19: Initial creation

TODO:
- None
"""

from __future__ import annotations

import math
from datetime import datetime, timedelta

import pytest
from pydantic import ValidationError
from sunseries.src.models import AssembledSeries, RequestWindow, Sample

START = datetime(2022, 9, 28)


class TestSample:
    def test_from_hit(self) -> None:
        hit = {
            "_id": "abc",
            "_source": {
                "JPtime": "2022-09-28T10:00:00.5",
                "solarIrradiance(kw/m^2)": 0.812,
                "ac-pw(kw)": 3.1,
                "utctime": "2022-09-28T01:00:00.5",
            },
        }

        sample = Sample.from_hit(hit)

        assert sample.timestamp == datetime(2022, 9, 28, 10, 0, 0, 500000)
        assert sample.irradiance == 0.812
        assert sample.synthetic is False
        assert sample.sensor_fields == {"ac-pw(kw)": 3.1, "utctime": "2022-09-28T01:00:00.5"}

    def test_from_hit_missing_source(self) -> None:
        with pytest.raises(KeyError):
            Sample.from_hit({"_id": "abc"})

    def test_from_hit_source_not_object(self) -> None:
        with pytest.raises(TypeError, match="_source"):
            Sample.from_hit({"_id": "abc", "_source": None})

    def test_synthetic(self) -> None:
        sample = Sample.synthetic_at(START)

        assert sample.timestamp == START
        assert sample.irradiance == 0.0
        assert sample.synthetic is True
        assert sample.sensor_fields == {}

    def test_frozen(self) -> None:
        sample = Sample(timestamp=START, irradiance=0.1)
        with pytest.raises(ValidationError):
            sample.irradiance = 0.2  # type: ignore[misc]


class TestRequestWindow:
    @pytest.mark.parametrize(
        ("span", "delta", "days"),
        [
            (0.0, timedelta(0), 1),
            (0.5, timedelta(hours=12), 1),
            (1.0, timedelta(days=1), 1),
            (1.5, timedelta(days=1, hours=12), 2),
            (2.0, timedelta(days=2), 2),
            (0.1, timedelta(hours=2), 1),
        ],
    )
    def test_span_rules(self, span: float, delta: timedelta, days: int) -> None:
        window = RequestWindow(start=START, span=span)

        assert window.span_delta == delta
        assert window.end == START + delta
        assert window.day_count == days

    @pytest.mark.parametrize("span", [-0.5, math.inf, math.nan])
    def test_invalid_span_rejected(self, span: float) -> None:
        with pytest.raises(ValidationError):
            RequestWindow(start=START, span=span)


class TestAssembledSeries:
    def test_unpacks_as_pair(self) -> None:
        timestamps, values = AssembledSeries(timestamps=[START], values=[0.0])
        assert timestamps == [START]
        assert values == [0.0]
