from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Dict, Iterable, List, Mapping, Optional, Sequence

from .classifier import apply_filter
from .exceptions import UnknownCategoryError
from .fetcher import FeedFetcher
from .models import NewsItem
from .normalizer import to_news_item
from .sources import DEFAULT_CATEGORIES, CategorySpec, CategoryTag, FilterStage, SourceGroup, category_key

logger = logging.getLogger(__name__)


def _newest_first(items: Iterable[NewsItem]) -> List[NewsItem]:
    return sorted(items, key=lambda x: x.published_at, reverse=True)


def _take(items: Sequence[NewsItem], n: Optional[int]) -> List[NewsItem]:
    return list(items) if n is None else list(items[:n])


async def _gather_all(aws: Iterable[Awaitable[Any]]) -> List[Any]:
    """
    Run awaitables concurrently and return their results in order.

    If one fails or the caller is cancelled, the rest are cancelled and awaited
    before the error propagates, so no request outlives the call.
    """
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


class NewsAggregator:
    """
    High-level API: return the freshest headlines for a category.

    Pipeline per category: fetch every group concurrently (one task per feed)
    → enrich → sort + cap each group → filter → blend → sort → cap.

    An empty list means no results (every feed failed or everything was
    filtered out). Feed failures never raise.
    """

    def __init__(
        self,
        categories: Mapping[CategoryTag, CategorySpec] = DEFAULT_CATEGORIES,
        *,
        fetcher: Optional[FeedFetcher] = None,
    ) -> None:
        self.categories = {category_key(k): spec for k, spec in categories.items()}
        self._owns_fetcher = fetcher is None
        self.fetcher = fetcher or FeedFetcher()

    async def __aenter__(self) -> "NewsAggregator":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_fetcher:
            await self.fetcher.aclose()

    def spec_for(self, category: CategoryTag) -> CategorySpec:
        try:
            return self.categories[category_key(category)]
        except KeyError:
            raise UnknownCategoryError(f"No configuration for category: {category!r}") from None

    async def _fetch_group(self, group: SourceGroup) -> List[NewsItem]:
        results = await self.fetcher.fetch_many(group.sources)
        # Failed feeds arrive with no items; each item is stamped with its own feed's name
        pool = [
            to_news_item(raw, result.source.name)
            for result in results
            for raw in result.items
        ]
        return _newest_first(pool)[: group.fetch_limit]

    async def get_news(self, category: CategoryTag) -> List[NewsItem]:
        spec = self.spec_for(category)

        # Groups run side by side; cancelling this call cancels every pending fetch
        pools = await _gather_all(self._fetch_group(g) for g in spec.groups)

        if spec.filter_stage is FilterStage.PER_GROUP:
            blended = [
                item
                for group, pool in zip(spec.groups, pools)
                for item in _take(apply_filter(pool, spec.policy), group.share)
            ]
        else:
            blended = apply_filter(
                (item for group, pool in zip(spec.groups, pools) for item in _take(pool, group.share)),
                spec.policy,
            )

        items = _newest_first(blended)[: spec.display_limit]

        if not items:
            logger.warning("No news for category %s", spec.key)
        else:
            logger.info("Aggregated %d items for category %s", len(items), spec.key)
        return items

    async def get_all(
        self, categories: Optional[Iterable[CategoryTag]] = None
    ) -> Dict[CategoryTag, List[NewsItem]]:
        """Fetch several categories at once (all configured ones by default)."""
        wanted = [self.spec_for(c).category for c in (categories or self.categories)]
        results = await _gather_all(self.get_news(c) for c in wanted)
        return dict(zip(wanted, results))
