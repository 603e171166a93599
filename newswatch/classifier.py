from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Tuple

from .models import NewsItem


class FilterKind(str, Enum):
    EXCLUDE = "exclude"
    INCLUDE = "include"
    NONE = "none"


@dataclass(frozen=True)
class FilterPolicy:
    """
    Keyword policy for a category.

    Keywords are matched as plain substrings, not words: "cup" also matches
    "cupcake" and "app" matches "happy". Expect some false positives.
    """
    kind: FilterKind = FilterKind.NONE
    keywords: Tuple[str, ...] = ()

    @classmethod
    def exclude(cls, keywords: Iterable[str]) -> "FilterPolicy":
        return cls(FilterKind.EXCLUDE, tuple(keywords))

    @classmethod
    def include(cls, keywords: Iterable[str]) -> "FilterPolicy":
        return cls(FilterKind.INCLUDE, tuple(keywords))


NO_FILTER = FilterPolicy()


def _contains_any(text: str, keywords: Iterable[str]) -> bool:
    t = text.lower()
    return any(k.lower() in t for k in keywords)


def matches(item: NewsItem, policy: FilterPolicy) -> bool:
    """Whether `item` passes `policy`, judged on its title and description."""
    if policy.kind is FilterKind.NONE:
        return True
    content = item.title + " " + item.description
    hit = _contains_any(content, policy.keywords)
    if policy.kind is FilterKind.EXCLUDE:
        return not hit
    return hit


def apply_filter(items: Iterable[NewsItem], policy: FilterPolicy) -> List[NewsItem]:
    return [it for it in items if matches(it, policy)]
