from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Protocol


class TimerHandle(Protocol):
    def stop(self) -> None: ...


class Clock(ABC):
    """Source of one-shot and repeating timers."""

    @abstractmethod
    def call_later(self, delay: float, callback: Callable[[], Any]) -> TimerHandle:
        pass

    @abstractmethod
    def call_every(self, interval: float, callback: Callable[[], Any]) -> TimerHandle:
        pass


class TextualClock(Clock):
    """Timers driven by a Textual message pump, usually the app itself."""

    def __init__(self, owner):
        self.owner = owner

    def call_later(self, delay: float, callback: Callable[[], Any]) -> TimerHandle:
        return self.owner.set_timer(delay, callback)

    def call_every(self, interval: float, callback: Callable[[], Any]) -> TimerHandle:
        return self.owner.set_interval(interval, callback)
