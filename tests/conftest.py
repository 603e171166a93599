from __future__ import annotations

from typing import Callable, Dict, Optional, Union

import httpx
import pytest

from newswatch import FeedFetcher

Route = Union[bytes, int, Exception, Callable[[httpx.Request], object]]


def rss_item(
    title: str = "",
    link: str = "",
    description: str = "",
    pub_date: str = "",
    enclosure: Optional[Dict[str, str]] = None,
) -> str:
    parts = ["<item>"]
    if title:
        parts.append(f"<title>{title}</title>")
    if link:
        parts.append(f"<link>{link}</link>")
    if description:
        parts.append(f"<description><![CDATA[{description}]]></description>")
    if pub_date:
        parts.append(f"<pubDate>{pub_date}</pubDate>")
    if enclosure:
        attrs = " ".join(f'{k}="{v}"' for k, v in enclosure.items())
        parts.append(f"<enclosure {attrs} />")
    parts.append("</item>")
    return "".join(parts)


def rss_document(*items: str) -> bytes:
    body = "".join(items)
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        '<rss version="2.0"><channel><title>Test feed</title>'
        f"{body}</channel></rss>"
    ).encode("utf-8")


@pytest.fixture
def rss():
    """Builds RSS 2.0 documents: rss(rss_item(...), ...)."""
    return rss_document


@pytest.fixture
def item():
    return rss_item


@pytest.fixture
def make_fetcher():
    """
    FeedFetcher backed by httpx.MockTransport.

    Routes map a url to the response body (bytes), a status code (int), an
    exception to raise, or an async/sync handler taking the request.
    """
    def _make(routes: Dict[str, Route], **kwargs) -> FeedFetcher:
        async def handler(request: httpx.Request) -> httpx.Response:
            route = routes.get(str(request.url))
            if route is None:
                return httpx.Response(404)
            if isinstance(route, bytes):
                return httpx.Response(200, content=route)
            if isinstance(route, int):
                return httpx.Response(route)
            if isinstance(route, Exception):
                raise route
            result = route(request)
            if hasattr(result, "__await__"):
                result = await result
            return result

        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return FeedFetcher(client=client, **kwargs)

    return _make
