from __future__ import annotations

import logging
from typing import Callable, Optional

from .config import DEBOUNCE_SECONDS
from .timers import Clock, TimerHandle

logger = logging.getLogger("newsfeed")


def normalize_query(raw: str) -> str:
    return raw.strip().lower()


class DebouncedQuery:
    """Search input that settles into a normalized query after typing stops.

    ``raw`` follows every keystroke. ``normalized`` only changes once no new
    input has arrived for ``delay`` seconds, and then reflects the last raw
    value seen. Each new input stops the pending timer and starts a fresh one,
    so a burst of keystrokes produces a single commit.
    """

    def __init__(
        self,
        clock: Clock,
        on_commit: Optional[Callable[[str], None]] = None,
        delay: float = DEBOUNCE_SECONDS,
    ):
        self.clock = clock
        self.on_commit = on_commit
        self.delay = delay
        self.raw = ""
        self.normalized = ""
        self._timer: Optional[TimerHandle] = None

    @property
    def pending(self) -> bool:
        return self._timer is not None

    def on_input(self, raw: str) -> None:
        if raw == self.raw and self._timer is None:
            return
        self.raw = raw
        self._cancel()
        self._timer = self.clock.call_later(self.delay, self._commit)

    def clear(self) -> None:
        """Drop the query at once, without waiting for the idle delay."""
        self._cancel()
        self.raw = ""
        self._apply("")

    def teardown(self) -> None:
        self._cancel()

    def _cancel(self) -> None:
        if self._timer is not None:
            self._timer.stop()
            self._timer = None

    def _commit(self) -> None:
        self._timer = None
        self._apply(normalize_query(self.raw))

    def _apply(self, normalized: str) -> None:
        self.normalized = normalized
        logger.debug("Search query committed: %r", normalized)
        if self.on_commit:
            self.on_commit(normalized)
