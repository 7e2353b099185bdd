from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from .errors import MalformedDataWarning

logger = logging.getLogger("newsfeed")


# --- Data models ---
@dataclass(frozen=True)
class NewsItem:
    title: str
    link: str
    description: Optional[str] = None
    image_url: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> NewsItem:
        return cls(
            title=str(data.get("title") or ""),
            link=str(data.get("link") or ""),
            description=_optional_text(data.get("description")),
            image_url=_optional_text(data.get("image_url")),
        )


@dataclass(frozen=True)
class FeedEnvelope:
    news: Tuple[NewsItem, ...] = ()
    scraped_at: Optional[str] = None

    @classmethod
    def from_json(cls, payload: Any) -> FeedEnvelope:
        """Build an envelope from a decoded response body.

        A payload without a ``news`` list is treated as an empty feed. The
        problem is logged and reported as a ``MalformedDataWarning`` but never
        raised, so a half-broken backend still yields a usable (empty) list.
        """
        if not isinstance(payload, dict):
            _warn_malformed(f"expected a JSON object, got {type(payload).__name__}")
            return cls()

        raw_news = payload.get("news")
        if not isinstance(raw_news, list):
            _warn_malformed("'news' is missing or not a list")
            raw_news = []

        items = []
        for entry in raw_news:
            if not isinstance(entry, dict):
                logger.debug("Skipping non-object feed entry: %r", entry)
                continue
            items.append(NewsItem.from_dict(entry))

        scraped_at = payload.get("scraped_at")
        return cls(
            news=tuple(items),
            scraped_at=str(scraped_at) if scraped_at else None,
        )


def _optional_text(value: Any) -> Optional[str]:
    if isinstance(value, str) and value:
        return value
    if value is not None:
        logger.debug("Ignoring non-text field value: %r", value)
    return None


def _warn_malformed(reason: str) -> None:
    logger.warning("Malformed feed envelope: %s", reason)
    warnings.warn(MalformedDataWarning(reason), stacklevel=3)
