"""
Source registry and per-category configuration.

Everything here is plain data. Pass a different mapping to
`NewsAggregator(categories=...)` to change feeds, keywords or limits.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Tuple, Union

from .classifier import NO_FILTER, FilterPolicy
from .models import FeedSource


class Category(str, Enum):
    WORLD = "world"
    FOREIGN = "foreign"
    SPORT = "sport"
    TECH = "tech"
    ENTERTAINMENT = "entertainment"


# Configurations may add their own categories as plain strings
CategoryTag = Union[Category, str]


def category_key(category: CategoryTag) -> str:
    return category.value if isinstance(category, Category) else str(category)


class FilterStage(str, Enum):
    # filter each group's pool, then take its share
    PER_GROUP = "per_group"
    # take each group's share, then filter the blend
    BLENDED = "blended"


LOCAL_SOURCES: Tuple[FeedSource, ...] = (
    FeedSource("Vanguard", "https://www.vanguardngr.com/feed"),
    FeedSource("The Guardian", "https://guardian.ng/feed"),
    FeedSource("Premium Times", "https://www.premiumtimesng.com/feed"),
    FeedSource("Punch", "https://punchng.com/feed"),
    FeedSource("Daily Post", "https://dailypost.ng/feed"),
    FeedSource("Tribune", "https://tribuneonlineng.com/feed"),
)

FOREIGN_SOURCES: Tuple[FeedSource, ...] = (
    FeedSource("BBC World", "https://feeds.bbci.co.uk/news/world/rss.xml"),
    FeedSource("CNN", "http://rss.cnn.com/rss/edition_world.rss"),
    FeedSource("Al Jazeera", "https://www.aljazeera.com/xml/rss/all.xml"),
)

SPORT_SOURCES: Tuple[FeedSource, ...] = (
    FeedSource("Complete Sports (NG)", "https://www.completesports.com/feed"),
    FeedSource("BBC Football", "https://feeds.bbci.co.uk/sport/football/rss.xml"),
    FeedSource("Sky Sports Football", "https://www.skysports.com/rss/11095"),
    FeedSource("Goal", "https://www.goal.com/feeds/en/news"),
)

TECH_SOURCES: Tuple[FeedSource, ...] = (
    FeedSource("TechCrunch", "https://techcrunch.com/feed/"),
    FeedSource("The Verge", "https://www.theverge.com/rss/index.xml"),
    FeedSource("Wired", "https://www.wired.com/feed/rss"),
    FeedSource("Vanguard Tech", "https://www.vanguardngr.com/category/technology/feed/"),
)

ENTERTAINMENT_SOURCES: Tuple[FeedSource, ...] = (
    FeedSource("Variety", "https://variety.com/feed/"),
    FeedSource("Hollywood Reporter", "https://www.hollywoodreporter.com/feed/"),
    FeedSource("Vanguard Entertainment", "https://www.vanguardngr.com/category/entertainment/feed/"),
    FeedSource("Punch Entertainment", "https://punchng.com/topics/entertainment/feed/"),
)

WORLD_EXCLUDE_KEYWORDS: Tuple[str, ...] = (
    "tech", "technology", "software", "app", "gadget", "smartphone", "iphone", "android",
    "sport", "football", "soccer", "basketball", "tennis", "golf", "match", "league", "cup",
    "movie", "entertainment", "cinema", "celebrity", "music", "song", "album", "artist",
    "actor", "actress", "hollywood", "nollywood", "box office",
    "gaming", "nintendo", "playstation", "xbox",
)

SPORT_KEYWORDS: Tuple[str, ...] = (
    "football", "soccer", "league", "club", "premier league", "champions league", "afcon",
    "super eagles", "npfl", "nigerian league", "nations cup", "world cup", "coach", "striker",
    "manchester", "chelsea", "liverpool", "arsenal", "real madrid", "barcelona", "bayern",
    "psg", "italy", "spain", "germany", "france", "ucl", "uel", "transfers",
)

TECH_KEYWORDS: Tuple[str, ...] = (
    "tech", "technology", "ai", "artificial intelligence", "software", "hardware",
    "app", "startup", "silicon", "semiconductor", "robot", "computing", "digital",
    "smartphone", "mobile", "internet", "google", "apple", "microsoft", "meta", "tesla",
)

ENTERTAINMENT_KEYWORDS: Tuple[str, ...] = (
    "movie", "film", "cinema", "entertainment", "celebrity", "music", "song", "album",
    "artist", "singer", "actor", "actress", "hollywood", "nollywood", "showbiz", "award",
    "series", "streaming", "netflix", "theatre", "tv",
)


@dataclass(frozen=True)
class SourceGroup:
    """
    Feeds fetched as one batch.

    `fetch_limit` caps the group's newest items before filtering; `share` caps
    what the group contributes to the category (None = everything left).
    """
    name: str
    sources: Tuple[FeedSource, ...]
    fetch_limit: int
    share: Optional[int] = None

    def __post_init__(self) -> None:
        if self.fetch_limit < 0:
            raise ValueError(f"fetch_limit must be >= 0 for group {self.name!r}")
        if self.share is not None and self.share < 0:
            raise ValueError(f"share must be >= 0 for group {self.name!r}")


@dataclass(frozen=True)
class CategorySpec:
    category: CategoryTag
    groups: Tuple[SourceGroup, ...]
    policy: FilterPolicy = NO_FILTER
    filter_stage: FilterStage = FilterStage.PER_GROUP
    display_limit: int = 20

    def __post_init__(self) -> None:
        if not self.groups:
            raise ValueError(f"category {self.key!r} needs at least one source group")
        if self.display_limit < 0:
            raise ValueError(f"display_limit must be >= 0 for {self.key!r}")

    @property
    def key(self) -> str:
        return category_key(self.category)

    @property
    def sources(self) -> Tuple[FeedSource, ...]:
        return tuple(s for g in self.groups for s in g.sources)


DEFAULT_CATEGORIES: Mapping[CategoryTag, CategorySpec] = MappingProxyType({
    Category.WORLD: CategorySpec(
        Category.WORLD,
        groups=(
            SourceGroup("local", LOCAL_SOURCES, fetch_limit=60, share=14),
            SourceGroup("foreign", FOREIGN_SOURCES, fetch_limit=30, share=6),
        ),
        policy=FilterPolicy.exclude(WORLD_EXCLUDE_KEYWORDS),
    ),
    Category.FOREIGN: CategorySpec(
        Category.FOREIGN,
        groups=(SourceGroup("foreign", FOREIGN_SOURCES, fetch_limit=20),),
    ),
    Category.SPORT: CategorySpec(
        Category.SPORT,
        groups=(SourceGroup("sport", SPORT_SOURCES, fetch_limit=100),),
        policy=FilterPolicy.include(SPORT_KEYWORDS),
    ),
    Category.TECH: CategorySpec(
        Category.TECH,
        groups=(SourceGroup("tech", TECH_SOURCES, fetch_limit=100),),
        policy=FilterPolicy.include(TECH_KEYWORDS),
    ),
    Category.ENTERTAINMENT: CategorySpec(
        Category.ENTERTAINMENT,
        groups=(SourceGroup("entertainment", ENTERTAINMENT_SOURCES, fetch_limit=100),),
        policy=FilterPolicy.include(ENTERTAINMENT_KEYWORDS),
    ),
})
