"""
Scroll-paginated Elasticsearch fetcher for one calendar day of irradiance hits.

For a requested day the fetcher first requires credentials, then checks the
DayCache; a cached day is returned without creating an HTTP client.
Otherwise it runs a search with a scroll cursor over ``JPtime`` in
``[day 00:00:00, day+1 00:00:00)``, follows the cursor until an empty page
comes back, writes every hit to the cache in one piece, and reads the day
back from the cache.

Failures are fatal: any transport error, non-2xx status, or malformed
response raises TransportError and nothing is cached. There is no retry.

Operations:
- fetch(day): Return the day's samples, fetching and caching if needed.

CHANGELOG:
- 2026-10-19: Initial creation
- 2026-10-19: Require credentials before the cache check

TODO:
- None
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any

import httpx

from sunseries.src.config import SeriesSettings
from sunseries.src.day_cache import DayCache
from sunseries.src.exceptions import TransportError
from sunseries.src.models import TIMESTAMP_FIELD, Sample
from sunseries.src.timeconv import store_range_for_day

logger = logging.getLogger(__name__)


class RemoteSeriesFetcher:
    """Fetches and caches one day of search hits at a time.

    Args:
        settings: Store location, credentials, and paging parameters.
        cache: The DayCache to check and populate. Defaults to a cache in
            ``settings.cache_dir``.
        transport: Optional httpx transport, used in place of the network
            (for example ``httpx.MockTransport`` in tests).

    Usage::

        fetcher = RemoteSeriesFetcher(SeriesSettings())
        samples = await fetcher.fetch(date(2022, 9, 28))
    """

    def __init__(
        self,
        settings: SeriesSettings,
        cache: DayCache | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._cache = cache if cache is not None else DayCache(settings.cache_dir)
        self._transport = transport

    @property
    def cache(self) -> DayCache:
        """The DayCache this fetcher reads from and writes to."""
        return self._cache

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def fetch(self, day: date | datetime) -> list[Sample]:
        """Return the samples for the local calendar day of *day*.

        Credentials are required even when the day is already cached.

        Raises:
            ConfigMissingError: If credentials are not configured.
            TransportError: On any remote query or authentication failure.
            CacheCorruptError: If the cached file cannot be parsed.
        """
        user_name, password = self._settings.require_credentials()

        if self._cache.has(day):
            logger.debug("Cache hit for %s, no remote query", _day_of(day))
            return self._cache.read(day)

        hits = await self._fetch_hits(day, auth=(user_name, password))
        self._cache.write(day, hits)
        return self._cache.read(day)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    async def _fetch_hits(
        self,
        day: date | datetime,
        *,
        auth: tuple[str, str],
    ) -> list[dict[str, Any]]:
        """Run the search and follow the scroll cursor until an empty page."""
        gte, lt = store_range_for_day(day)
        keepalive = self._settings.scroll_keepalive
        body = {
            "from": 0,
            "size": self._settings.page_size,
            "query": {"range": {TIMESTAMP_FIELD: {"gte": gte, "lt": lt}}},
        }

        logger.info(
            "Fetching %s from index %s (JPtime >= %s, < %s)",
            _day_of(day),
            self._settings.elastic_index,
            gte,
            lt,
        )

        hits: list[dict[str, Any]] = []
        async with httpx.AsyncClient(
            base_url=self._settings.elastic_url,
            auth=auth,
            timeout=self._settings.request_timeout_s,
            transport=self._transport,
        ) as client:
            page, scroll_id = await self._request_page(
                client,
                f"/{self._settings.elastic_index}/_search",
                params={"scroll": keepalive},
                json_body=body,
            )
            hits.extend(page)

            while page:
                logger.debug("Fetched %d hits so far for %s", len(hits), _day_of(day))
                page, scroll_id = await self._request_page(
                    client,
                    "/_search/scroll",
                    json_body={"scroll": keepalive, "scroll_id": scroll_id},
                )
                hits.extend(page)

            await self._clear_scroll(client, scroll_id)

        logger.info("Fetched %d hits for %s", len(hits), _day_of(day))
        return hits

    async def _request_page(
        self,
        client: httpx.AsyncClient,
        url: str,
        *,
        json_body: dict[str, Any],
        params: dict[str, str] | None = None,
    ) -> tuple[list[dict[str, Any]], str]:
        """POST one search/scroll request and return ``(hits, scroll_id)``."""
        try:
            response = await client.post(url, json=json_body, params=params)
        except httpx.HTTPError as exc:
            raise TransportError(f"Request to {url} failed: {exc}") from exc

        if not response.is_success:
            raise TransportError(
                f"Request to {url} returned HTTP {response.status_code}",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
            page = payload["hits"]["hits"]
            scroll_id = payload["_scroll_id"]
        except (ValueError, KeyError, TypeError) as exc:
            raise TransportError(
                f"Malformed response from {url}: {exc!r}",
                status_code=response.status_code,
            ) from exc

        if not isinstance(page, list) or not isinstance(scroll_id, str):
            raise TransportError(
                f"Malformed response from {url}: unexpected hits/_scroll_id types",
                status_code=response.status_code,
            )
        return page, scroll_id

    async def _clear_scroll(self, client: httpx.AsyncClient, scroll_id: str) -> None:
        """Release the scroll context on the store.

        Best-effort: the hits are already complete, so a failure here is
        logged and not raised. The cursor expires on its own after the
        keepalive.
        """
        try:
            response = await client.request(
                "DELETE", "/_search/scroll", json={"scroll_id": scroll_id}
            )
        except httpx.HTTPError:
            logger.warning("Failed to clear scroll context", exc_info=True)
            return
        if not response.is_success:
            logger.warning(
                "Clearing scroll context returned HTTP %d", response.status_code
            )


def _day_of(day: date | datetime) -> date:
    """Return the calendar date of *day*."""
    return day.date() if isinstance(day, datetime) else day
