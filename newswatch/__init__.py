"""
newswatch

Aggregates headlines from many RSS feeds into one freshness-ranked list per
editorial category (world, foreign, sport, tech, entertainment).

Core ideas:
- Input: a category
- Process: fetch every feed of the category concurrently → enrich (source name,
  thumbnail, normalized date) → sort + cap per source group → keyword filter →
  blend groups → sort (newest first) → cap to the display limit
- Output: List[NewsItem]; an empty list means "no results"

Example
-------
import asyncio
from newswatch import Category, NewsAggregator

async def main():
    async with NewsAggregator() as aggregator:
        news = await aggregator.get_news(Category.SPORT)
    for item in news:
        print(item.published_at, item.source_name, item.title)

asyncio.run(main())
"""
from .classifier import NO_FILTER, FilterKind, FilterPolicy
from .core import NewsAggregator
from .dates import EPOCH, normalize_date, parse_date
from .exceptions import FeedFetchError, UnknownCategoryError
from .fetcher import FeedFetcher
from .models import FeedSource, FetchResult, NewsItem, RawItem
from .normalizer import enrich
from .sources import DEFAULT_CATEGORIES, Category, CategorySpec, CategoryTag, FilterStage, SourceGroup

__all__ = [
    "Category",
    "CategorySpec",
    "CategoryTag",
    "DEFAULT_CATEGORIES",
    "EPOCH",
    "FeedFetchError",
    "FeedFetcher",
    "FeedSource",
    "FetchResult",
    "FilterKind",
    "FilterPolicy",
    "FilterStage",
    "NO_FILTER",
    "NewsAggregator",
    "NewsItem",
    "RawItem",
    "SourceGroup",
    "UnknownCategoryError",
    "enrich",
    "normalize_date",
    "parse_date",
]
