from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Tuple


@dataclass(frozen=True)
class FeedSource:
    """A named RSS feed. Two sources are the same feed when their urls match."""
    name: str = field(compare=False)
    url: str


@dataclass(frozen=True)
class RawItem:
    """
    One <item> as found in a feed document. All fields are raw text; nothing is
    validated at parse time.
    """
    title: str = ""
    link: str = ""
    description: str = ""
    pub_date_text: str = ""
    enclosure_url: Optional[str] = None
    enclosure_type: Optional[str] = None
    content_encoded: str = ""


@dataclass(frozen=True)
class NewsItem:
    """
    Stable public model representing an enriched news item.

    `link` is the business key used by bookmark/cache collaborators. The engine
    never deduplicates on it.

    WARNING: Do not change fields lightly. This is the library's contract.
    """
    title: str
    link: str
    description: str
    pub_date_text: str
    source_name: str
    published_at: datetime
    image_url: Optional[str] = None
    enclosure_url: Optional[str] = None
    enclosure_type: Optional[str] = None
    content_encoded: str = ""


@dataclass(frozen=True)
class FetchResult:
    """Outcome of fetching one source: its items, or the reason it contributed none."""
    source: FeedSource
    items: Tuple[RawItem, ...] = ()
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None
