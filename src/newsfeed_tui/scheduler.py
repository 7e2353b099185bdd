from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from .config import AUTO_REFRESH_SECONDS
from .timers import Clock, TimerHandle

logger = logging.getLogger("newsfeed")


class RefreshScheduler:
    """Runs a callback now and then on a fixed interval until deactivated."""

    def __init__(
        self,
        clock: Clock,
        callback: Callable[[], Any],
        interval: float = AUTO_REFRESH_SECONDS,
    ):
        self.clock = clock
        self.callback = callback
        self.interval = interval
        self._timer: Optional[TimerHandle] = None

    @property
    def active(self) -> bool:
        return self._timer is not None

    def activate(self) -> None:
        if self.active:
            return
        logger.debug("Auto refresh every %ss", self.interval)
        self._timer = self.clock.call_every(self.interval, self._tick)
        self.callback()

    def deactivate(self) -> None:
        if self._timer is not None:
            self._timer.stop()
            self._timer = None
            logger.debug("Auto refresh stopped")

    def refresh_now(self) -> None:
        """Run the callback out of band; the interval keeps its schedule."""
        self.callback()

    def _tick(self) -> None:
        logger.debug("Auto refresh tick")
        self.callback()
