from __future__ import annotations

from typing import List, Sequence

from .datamodels import NewsItem


def matches(item: NewsItem, normalized_query: str) -> bool:
    haystack = (item.title + (item.description or "")).lower()
    return normalized_query in haystack


def filter_items(items: Sequence[NewsItem], normalized_query: str) -> List[NewsItem]:
    """Return the items whose title and description contain the query.

    An empty query keeps everything. Order is preserved.
    """
    if not normalized_query:
        return list(items)
    return [item for item in items if matches(item, normalized_query)]
