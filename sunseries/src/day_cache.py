"""
Per-day JSON file cache for raw irradiance search hits.

Each local calendar day maps to ``<cache_dir>/docs_YYYYMMDD.json`` holding the
verbatim JSON array of hits returned by the store. The existence of the file
is the only completeness marker, so writes are all-or-nothing: content goes to
a temporary file in the same directory and is hard-linked into place, which
fails if the target already exists. A day, once written, is never overwritten
or expired.

Operations:
- has(day): True if the day's file exists.
- read(day): Parse the day's file into a list of Samples.
- write(day, hits): Create the day's file if absent; no-op otherwise.
- path_for(day): Deterministic file path for a day.

CHANGELOG:
- 2026-10-19: Initial creation

TODO:
- None
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from datetime import date, datetime
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from sunseries.src.exceptions import CacheCorruptError
from sunseries.src.models import Sample

logger = logging.getLogger(__name__)


def cache_file_name(day: date | datetime) -> str:
    """Return the cache file name for *day*, e.g. ``docs_20220928.json``."""
    return f"docs_{day.year}{day.month:02d}{day.day:02d}.json"


class DayCache:
    """Permanent one-file-per-day cache of raw search hits.

    Args:
        cache_dir: Directory holding the cache files. Created on first
            write. Accepts ``str`` or ``pathlib.Path``.

    Usage::

        cache = DayCache("jsons")
        if not cache.has(day):
            cache.write(day, hits)
        samples = cache.read(day)
    """

    def __init__(self, cache_dir: str | Path) -> None:
        self._cache_dir = Path(cache_dir)

    @property
    def cache_dir(self) -> Path:
        """Directory holding the cache files."""
        return self._cache_dir

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def path_for(self, day: date | datetime) -> Path:
        """Return the cache file path for the local calendar day of *day*."""
        return self._cache_dir / cache_file_name(day)

    def has(self, day: date | datetime) -> bool:
        """Return True if *day* has been cached."""
        return self.path_for(day).exists()

    def read(self, day: date | datetime) -> list[Sample]:
        """Load and parse the cached hits for *day*.

        Returns:
            The day's samples in file order (unsorted).

        Raises:
            FileNotFoundError: If *day* has not been cached.
            CacheCorruptError: If the file is not a JSON array of hits or a
                hit lacks a parsable timestamp or irradiance value.
        """
        path = self.path_for(day)
        text = path.read_text(encoding="utf-8")
        try:
            hits = json.loads(text)
        except json.JSONDecodeError as exc:
            raise CacheCorruptError(f"Cache file {path} is not valid JSON: {exc}", path) from exc

        if not isinstance(hits, list):
            raise CacheCorruptError(f"Cache file {path} does not hold a JSON array", path)

        samples: list[Sample] = []
        for idx, hit in enumerate(hits):
            try:
                samples.append(Sample.from_hit(hit))
            except (KeyError, TypeError, ValueError, ValidationError) as exc:
                raise CacheCorruptError(
                    f"Cache file {path}: malformed record at index {idx}: {exc!r}",
                    path,
                ) from exc

        logger.debug("Read %d records from %s", len(samples), path)
        return samples

    def write(self, day: date | datetime, hits: list[dict[str, Any]]) -> bool:
        """Persist *hits* for *day* unless the day is already cached.

        The file appears atomically with its full content or not at all.

        Args:
            day: Local calendar day the hits belong to.
            hits: Raw search hits, stored verbatim.

        Returns:
            True if the file was created, False if it already existed.
        """
        path = self.path_for(day)
        if path.exists():
            logger.info("Cache file %s already exists, skipping write", path)
            return False

        self._cache_dir.mkdir(parents=True, exist_ok=True)
        payload = json.dumps(hits, ensure_ascii=False)

        fd, tmp_name = tempfile.mkstemp(
            dir=self._cache_dir, prefix=f".{path.stem}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
                fh.flush()
                os.fsync(fh.fileno())
            try:
                os.link(tmp_name, path)
            except FileExistsError:
                logger.info("Cache file %s appeared concurrently, keeping it", path)
                return False
        finally:
            os.unlink(tmp_name)

        logger.info("Cached %d records for %s at %s", len(hits), day, path)
        return True
