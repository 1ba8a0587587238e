from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional, Sequence

import httpx

from .config import AggregatorConfig
from .exceptions import UpstreamFetchError
from .models import FetchOutcome, PlannedSource, RawFeedItem
from .parser import parse_raw_item

logger = logging.getLogger(__name__)


class FeedFetcher:
    """
    Fetch search feeds through the feed-to-JSON service (rss2json-compatible).

    The service receives the feed URL as `rss_url` and answers with a JSON body
    holding an `items` array.
    """

    def __init__(self, config: Optional[AggregatorConfig] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        self.config = config or AggregatorConfig()
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.config.timeout,
            headers={"User-Agent": self.config.user_agent},
            follow_redirects=True,
            transport=self._transport,
        )

    def _params(self, url: str) -> Dict[str, str]:
        params = {"rss_url": url}
        if self.config.api_key:
            params["api_key"] = self.config.api_key
        return params

    async def fetch(self, url: str, client: Optional[httpx.AsyncClient] = None) -> List[RawFeedItem]:
        """
        Fetch a single feed URL and return its raw items (possibly empty).

        Raises UpstreamFetchError on transport errors, non-2xx status or a non-JSON body.
        """
        if client is None:
            async with self._client() as own:
                return await self.fetch(url, own)

        try:
            resp = await client.get(self.config.feed_service_url, params=self._params(url))
        except httpx.HTTPError as e:
            raise UpstreamFetchError(url, f"Failed to fetch feed ({e.__class__.__name__})") from e

        if not resp.is_success:
            raise UpstreamFetchError(
                url, f"RSS fetch failed: {resp.status_code} {resp.reason_phrase}",
                status_code=resp.status_code,
            )

        try:
            body: Any = resp.json()
        except ValueError as e:
            raise UpstreamFetchError(url, "Feed service returned invalid JSON", status_code=resp.status_code) from e

        entries = body.get("items") if isinstance(body, dict) else None
        if not isinstance(entries, list):
            return []
        return [parse_raw_item(e) for e in entries if isinstance(e, dict)]

    async def fetch_outcome(self, source: PlannedSource, client: httpx.AsyncClient) -> FetchOutcome:
        """Fetch one planned source under the per-fetch timeout and settle it into a FetchOutcome."""
        try:
            items = await asyncio.wait_for(self.fetch(source.url, client), timeout=self.config.timeout)
        except asyncio.TimeoutError:
            err = UpstreamFetchError(source.url, f"Timed out after {self.config.timeout}s")
            return FetchOutcome(source=source, error=err)
        except UpstreamFetchError as e:
            return FetchOutcome(source=source, error=e)
        except Exception as e:
            # Anything else still only fails this source
            err = UpstreamFetchError(source.url, f"Unexpected fetch failure ({e.__class__.__name__}: {e})")
            err.__cause__ = e
            return FetchOutcome(source=source, error=err)
        return FetchOutcome(source=source, items=tuple(items))

    async def fetch_many(self, sources: Sequence[PlannedSource]) -> List[FetchOutcome]:
        """
        Fetch all sources concurrently and wait for every one to settle.

        Failures on individual sources are isolated: each comes back as a failed
        FetchOutcome and never aborts or delays the others. Order follows `sources`.
        """
        if not sources:
            return []
        async with self._client() as client:
            return list(await asyncio.gather(*(self.fetch_outcome(s, client) for s in sources)))
