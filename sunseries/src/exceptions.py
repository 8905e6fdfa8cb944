"""
Error taxonomy for series assembly.

Every condition here is fatal to the assembly call that raised it; nothing in
the package retries. An empty day is not an error (it triggers full-day gap
filling in the assembler).

CHANGELOG:
- 2026-10-19: Initial creation

TODO:
- None
"""

from __future__ import annotations

from pathlib import Path


class SeriesError(Exception):
    """Base class for all series assembly errors."""


class TransportError(SeriesError):
    """Remote query or authentication failure.

    Attributes:
        status_code: HTTP status returned by the store, or None when the
            request never got a response.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class CacheCorruptError(SeriesError):
    """An existing day cache file could not be parsed.

    Attributes:
        path: The offending cache file.
    """

    def __init__(self, message: str, path: Path) -> None:
        super().__init__(message)
        self.path = path


class ConfigMissingError(SeriesError):
    """Required configuration (store credentials) is absent."""
