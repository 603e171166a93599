from __future__ import annotations

import re
from typing import Optional

from .dates import normalize_date
from .models import NewsItem, RawItem

_IMG_SRC = re.compile(r"""src\s*=\s*['"]([^'"]+)['"]""")


def extract_image(html: Optional[str]) -> Optional[str]:
    """First `src="..."` / `src='...'` value in an HTML fragment, or None."""
    if not html:
        return None
    m = _IMG_SRC.search(html)
    return m.group(1) if m else None


def _image_for(item: RawItem) -> Optional[str]:
    if item.enclosure_url and (item.enclosure_type or "").startswith("image"):
        return item.enclosure_url
    return extract_image(item.description) or extract_image(item.content_encoded)


def to_news_item(item: RawItem, source_name: str) -> NewsItem:
    """
    Convert a RawItem into a NewsItem stamped with the feed it came from.

    Thumbnail, in order: an image enclosure, the first src in the description,
    the first src in content:encoded. No image is not an error.
    """
    return NewsItem(
        title=item.title,
        link=item.link,
        description=item.description,
        pub_date_text=item.pub_date_text,
        source_name=source_name,
        published_at=normalize_date(item.pub_date_text),
        image_url=_image_for(item),
        enclosure_url=item.enclosure_url,
        enclosure_type=item.enclosure_type,
        content_encoded=item.content_encoded,
    )


enrich = to_news_item
