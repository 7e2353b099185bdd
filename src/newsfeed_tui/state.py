from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .datamodels import FeedEnvelope, NewsItem
from .errors import FetchError, NetworkError


@dataclass
class FeedState:
    """Loading, error and data for the feed, mutated only on the UI loop."""

    items: Tuple[NewsItem, ...] = ()
    scraped_at: Optional[str] = None
    loading: bool = False
    error: Optional[FetchError] = None
    loaded_once: bool = False

    def begin(self) -> None:
        self.loading = True
        self.error = None

    def succeed(self, envelope: FeedEnvelope) -> None:
        self.items = envelope.news
        self.scraped_at = envelope.scraped_at
        self.loaded_once = True
        self.loading = False

    def fail(self, error: FetchError) -> None:
        # items and scraped_at stay as they were
        self.error = error
        self.loading = False

    @property
    def show_skeleton(self) -> bool:
        return self.loading and not self.loaded_once

    @property
    def error_message(self) -> str:
        if self.error is None:
            return ""
        if isinstance(self.error, NetworkError):
            return f"Network error: {self.error}" if str(self.error) else "Network error"
        return str(self.error) or "Failed to load news"
