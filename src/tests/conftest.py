from __future__ import annotations

from typing import Any, Callable, List, Optional

import pytest

from newsfeed_tui.storage import MemoryStore
from newsfeed_tui.timers import Clock


class FakeTimer:
    def __init__(self, clock: "FakeClock", due: float, callback, interval: Optional[float]):
        self.clock = clock
        self.due = due
        self.callback = callback
        self.interval = interval
        self.stopped = False

    def stop(self) -> None:
        self.stopped = True


class FakeClock(Clock):
    """Virtual time; timers fire only when ``advance`` is called."""

    def __init__(self):
        self.now = 0.0
        self.timers: List[FakeTimer] = []

    def call_later(self, delay: float, callback: Callable[[], Any]) -> FakeTimer:
        timer = FakeTimer(self, self.now + delay, callback, None)
        self.timers.append(timer)
        return timer

    def call_every(self, interval: float, callback: Callable[[], Any]) -> FakeTimer:
        timer = FakeTimer(self, self.now + interval, callback, interval)
        self.timers.append(timer)
        return timer

    @property
    def pending(self) -> List[FakeTimer]:
        return [t for t in self.timers if not t.stopped]

    def advance(self, seconds: float) -> None:
        target = self.now + seconds
        while True:
            due = [t for t in self.pending if t.due <= target]
            if not due:
                break
            timer = min(due, key=lambda t: t.due)
            self.now = timer.due
            if timer.interval is None:
                timer.stopped = True
            else:
                timer.due += timer.interval
            timer.callback()
        self.now = target


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store():
    return MemoryStore()
