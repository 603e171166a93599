from __future__ import annotations

import asyncio
import logging
import os
from typing import Iterable, List, Optional

import httpx

from .exceptions import FeedFetchError
from .models import FeedSource, FetchResult, RawItem
from .parser import parse_feed

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_S = float(os.getenv("NEWSWATCH_TIMEOUT_S", "15"))
# Some publishers reject default client identifiers.
DEFAULT_USER_AGENT = os.getenv(
    "NEWSWATCH_USER_AGENT",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36",
)


class FeedFetcher:
    """
    Fetches RSS feeds over one shared httpx.AsyncClient.

    The client is safe for concurrent use and lives as long as the fetcher, so
    create one fetcher per process and close it on shutdown.
    """

    def __init__(
        self,
        *,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        user_agent: str = DEFAULT_USER_AGENT,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.timeout_s = timeout_s
        self.user_agent = user_agent
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=timeout_s,
            headers={"User-Agent": user_agent},
            follow_redirects=True,
        )

    async def __aenter__(self) -> "FeedFetcher":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def fetch_entries(self, source: FeedSource) -> List[RawItem]:
        """
        Fetch a single feed and return its items.

        Raises FeedFetchError on network/timeout/status errors or when the
        document is not a valid feed.
        """
        try:
            response = await self._client.get(
                source.url,
                headers={"User-Agent": self.user_agent},
                timeout=self.timeout_s,
            )
            response.raise_for_status()
        except httpx.TimeoutException as e:
            raise FeedFetchError(f"Timed out fetching feed: {source.url}") from e
        except httpx.HTTPStatusError as e:
            raise FeedFetchError(
                f"Feed returned HTTP {e.response.status_code}: {source.url}"
            ) from e
        except httpx.HTTPError as e:
            raise FeedFetchError(f"Failed to fetch feed: {source.url} ({e})") from e

        return parse_feed(response.content, url=source.url)

    async def fetch(self, source: FeedSource) -> FetchResult:
        """
        Fetch one source without ever raising.

        A failed source is reported as a FetchResult with no items and an
        error message, so one bad feed cannot abort a batch. Cancellation is
        not swallowed.
        """
        try:
            items = await self.fetch_entries(source)
        except FeedFetchError as e:
            return FetchResult(source=source, error=str(e))
        except Exception as e:
            return FetchResult(source=source, error=f"Unexpected error for {source.url}: {e!r}")
        return FetchResult(source=source, items=tuple(items))

    async def fetch_many(self, sources: Iterable[FeedSource]) -> List[FetchResult]:
        """
        Fetch every source concurrently, one task per source, and wait for all.

        Results are in source order. Failures are logged here and otherwise
        only visible on the returned FetchResult.
        """
        sources = list(sources)
        results = await asyncio.gather(*(self.fetch(s) for s in sources))
        for result in results:
            if not result.ok:
                logger.warning("Skipping feed %s: %s", result.source.name, result.error)
        logger.debug(
            "Fetched %d/%d feeds (%d items)",
            sum(1 for r in results if r.ok),
            len(results),
            sum(len(r.items) for r in results),
        )
        return list(results)
