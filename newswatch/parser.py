from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

import feedparser

from .exceptions import FeedFetchError
from .models import RawItem

# bozo reasons that still leave a usable document behind
_RECOVERABLE_BOZO = (
    feedparser.CharacterEncodingOverride,
    feedparser.NonXMLContentType,
)


def _text(entry: Dict[str, Any], *keys: str) -> str:
    for key in keys:
        val = entry.get(key)
        if isinstance(val, str) and val:
            return val.strip()
    return ""


def _enclosure(entry: Dict[str, Any]) -> Tuple[Optional[str], Optional[str]]:
    # First <enclosure> only; feedparser exposes it as `href`
    enclosures = entry.get("enclosures")
    if isinstance(enclosures, list) and enclosures:
        first = enclosures[0]
        if isinstance(first, dict):
            url = first.get("href") or first.get("url")
            return (url or None), (first.get("type") or None)
    return None, None


def _content_encoded(entry: Dict[str, Any]) -> str:
    content = entry.get("content")
    if isinstance(content, list) and content:
        first = content[0]
        if isinstance(first, dict):
            value = first.get("value")
            if isinstance(value, str):
                return value
    return ""


def parse_entry(entry: Dict[str, Any]) -> RawItem:
    """
    Map a raw feed entry (from feedparser) to a RawItem.
    Missing fields default to "" (text) or None (enclosure); nothing is validated.
    """
    enclosure_url, enclosure_type = _enclosure(entry)
    return RawItem(
        title=_text(entry, "title"),
        link=_text(entry, "link"),
        description=_text(entry, "summary", "description"),
        # Atom-style feeds carry only <updated>
        pub_date_text=_text(entry, "published", "updated"),
        enclosure_url=enclosure_url,
        enclosure_type=enclosure_type,
        content_encoded=_content_encoded(entry),
    )


def parse_feed(content: bytes, *, url: str = "<feed>") -> List[RawItem]:
    """
    Parse a feed document into RawItems, in document order.

    Raises FeedFetchError when the document is not a feed at all.
    """
    feed = feedparser.parse(content)

    if getattr(feed, "bozo", 0):
        exc = getattr(feed, "bozo_exception", None)
        if not isinstance(exc, _RECOVERABLE_BOZO):
            msg = f"Invalid RSS feed: {url}"
            if exc:
                msg += f" ({exc})"
            raise FeedFetchError(msg)

    entries = getattr(feed, "entries", None)
    if not isinstance(entries, list):
        raise FeedFetchError(f"Feed has no entries: {url}")
    return [parse_entry(e) for e in entries]
