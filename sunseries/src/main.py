"""
Command-line entry point: assemble an irradiance series and compare it.

Loads SeriesSettings from the environment, assembles the requested window day
by day (cache first, Elasticsearch otherwise), and, when site coordinates are
given, logs a comparison against the clear-sky model. Optionally writes the
series to a CSV file.

Structured JSON logging is used for all events. Known failures (transport,
corrupt cache, missing credentials, invalid settings) are logged and mapped to
exit status 1.

CHANGELOG:
- 2026-10-19: Initial creation
- 2026-10-19: Lift per-day context fields into JSON log entries

TODO:
- None
"""

from __future__ import annotations

import argparse
import asyncio
import csv
import hashlib
import json
import logging
import sys
from datetime import UTC, datetime
from pathlib import Path

from pydantic import ValidationError

from sunseries.src.assembler import SeriesAssembler
from sunseries.src.comparison import clear_sky_series, compare_series
from sunseries.src.exceptions import SeriesError
from sunseries.src.models import AssembledSeries
from sunseries.src.timeconv import format_jptime, parse_jptime

logger = logging.getLogger(__name__)

DEFAULT_START = "2022-09-28T00:00:00"


# ---------------------------------------------------------------------------
# Structured JSON logging setup
# ---------------------------------------------------------------------------

# Context attributes passed through ``extra=`` that become top-level JSON keys.
_CONTEXT_FIELDS = ("day", "real_count", "synthetic_count", "last_instant")


class _JsonFormatter(logging.Formatter):
    """JSON log formatter that lifts per-day assembly context into the entry."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, object] = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        for name in _CONTEXT_FIELDS:
            value = getattr(record, name, None)
            if value is None:
                continue
            entry[name] = value if isinstance(value, int | float) else str(value)
        if record.exc_info and record.exc_info[1] is not None:
            entry["error"] = type(record.exc_info[1]).__name__
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


def configure_logging(level: int = logging.INFO) -> None:
    """Route the root logger to stderr as one JSON object per line."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_JsonFormatter())
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)


def _password_fingerprint(password: str) -> str:
    """Describe the store password without revealing it."""
    if not password:
        return "<unset>"
    return "sha256=" + hashlib.sha256(password.encode("utf-8")).hexdigest()[:10]


def log_config_summary(settings: object) -> None:
    """Log a config summary at startup, masking the store password.

    Args:
        settings: A SeriesSettings instance (or any object with the same attrs).
    """
    logger.info(
        "Series assembly starting with config: "
        "elastic_url=%s, elastic_index=%s, elastic_user_name=%s, "
        "cache_dir=%s, page_size=%s, scroll_keepalive=%s, "
        "request_timeout_s=%s, elastic_password=%s",
        settings.elastic_url,  # type: ignore[attr-defined]
        settings.elastic_index,  # type: ignore[attr-defined]
        settings.elastic_user_name or "<unset>",  # type: ignore[attr-defined]
        settings.cache_dir,  # type: ignore[attr-defined]
        settings.page_size,  # type: ignore[attr-defined]
        settings.scroll_keepalive,  # type: ignore[attr-defined]
        settings.request_timeout_s,  # type: ignore[attr-defined]
        _password_fingerprint(settings.elastic_password),  # type: ignore[attr-defined]
    )


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------


def write_csv(
    path: str | Path,
    series: AssembledSeries,
    clear_sky: list[float] | None = None,
) -> None:
    """Write the series (and clear-sky values if given) to a CSV file."""
    header = ["timestamp", "measured_kw_m2"]
    if clear_sky is not None:
        header.append("clear_sky_kw_m2")

    with Path(path).open("w", newline="", encoding="utf-8") as fh:
        writer = csv.writer(fh)
        writer.writerow(header)
        for idx, (ts, q) in enumerate(zip(series.timestamps, series.values)):
            row = [format_jptime(ts), q]
            if clear_sky is not None:
                row.append(clear_sky[idx])
            writer.writerow(row)


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    p = argparse.ArgumentParser(
        description="Assemble a per-second irradiance series and compare it to clear sky"
    )
    p.add_argument(
        "--start", type=parse_jptime, default=parse_jptime(DEFAULT_START),
        help=f"Window start, local time YYYY-MM-DDTHH:MM:SS (default {DEFAULT_START})",
    )
    p.add_argument(
        "--span", type=float, default=1.0,
        help="Window length in days, fractional allowed (default 1.0)",
    )
    p.add_argument("--lat", type=float, help="Site latitude in degrees")
    p.add_argument("--lng", type=float, help="Site longitude in degrees")
    p.add_argument("--output", type=Path, help="Write the series to this CSV file")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    return p.parse_args(argv)


async def run(args: argparse.Namespace, settings: object) -> AssembledSeries:
    """Assemble the series, log the comparison, and write the output."""
    from sunseries.src.fetcher import RemoteSeriesFetcher

    assembler = SeriesAssembler(RemoteSeriesFetcher(settings))  # type: ignore[arg-type]
    series = await assembler.assemble(args.start, args.span)

    clear_sky = None
    if args.lat is not None and args.lng is not None:
        summary = compare_series(series, args.lat, args.lng)
        logger.info(
            "Comparison: samples=%d measured_kwh_m2=%.4f clear_sky_kwh_m2=%.4f "
            "clearness_ratio=%s measured_peak=%s at %s clear_sky_peak=%s at %s",
            summary.sample_count,
            summary.measured_kwh_m2,
            summary.clear_sky_kwh_m2,
            summary.clearness_ratio,
            summary.measured_peak_kw_m2,
            summary.measured_peak_at,
            summary.clear_sky_peak_kw_m2,
            summary.clear_sky_peak_at,
        )
        if args.output is not None:
            clear_sky = clear_sky_series(series.timestamps, args.lat, args.lng)
    elif args.lat is not None or args.lng is not None:
        logger.warning("Both --lat and --lng are required for comparison, skipping")

    if args.output is not None:
        write_csv(args.output, series, clear_sky)
        logger.info("Wrote %d rows to %s", len(series.timestamps), args.output)

    return series


def main(argv: list[str] | None = None) -> int:
    """Synchronous entrypoint for the ``sunseries`` command."""
    args = parse_args(argv)
    configure_logging(logging.DEBUG if args.debug else logging.INFO)

    from sunseries.src.config import SeriesSettings

    try:
        settings = SeriesSettings()
    except ValidationError:
        logger.error("Invalid configuration", exc_info=True)
        return 1
    log_config_summary(settings)

    try:
        asyncio.run(run(args, settings))
    except (SeriesError, ValueError):
        logger.error("Series assembly failed", exc_info=True)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
