from __future__ import annotations

import logging
import os
from typing import Callable, Optional

from .config import STORAGE_KEYS
from .storage import KeyValueStore

logger = logging.getLogger("newsfeed")

DARK = "dark"
LIGHT = "light"


def detect_system_dark() -> Optional[bool]:
    """Guess whether the terminal has a dark background.

    Reads ``COLORFGBG`` (``"fg;bg"`` or ``"fg;default;bg"``), which several
    terminals export. Background colours 0-6 and 8 are dark, 7 and 9-15 are
    light. Returns None when the variable is missing or unparsable.
    """
    value = os.environ.get("COLORFGBG")
    if not value:
        return None
    bg = value.split(";")[-1]
    try:
        index = int(bg)
    except ValueError:
        return None
    if not 0 <= index <= 15:
        return None
    return index <= 6 or index == 8


class ThemeController:
    """Dark/light preference, persisted and pushed to ``apply`` on change."""

    def __init__(
        self,
        store: KeyValueStore,
        system_signal: Callable[[], Optional[bool]] = detect_system_dark,
        apply: Optional[Callable[[bool], None]] = None,
        key: str = STORAGE_KEYS["theme"],
    ):
        self.store = store
        self.system_signal = system_signal
        self.apply = apply
        self.key = key
        self.dark = False

    def initialize(self) -> bool:
        saved = self.store.get(self.key)
        if saved in (DARK, LIGHT):
            self.dark = saved == DARK
            logger.debug("Using saved theme: %s", saved)
        else:
            signal = self.system_signal()
            self.dark = bool(signal)
            logger.debug("No saved theme, system signal: %s", signal)
        self._apply()
        return self.dark

    def set(self, dark: bool) -> None:
        self.dark = dark
        error = self.store.set(self.key, DARK if dark else LIGHT)
        if error is not None:
            logger.info("Theme preference not saved: %s", error)
        self._apply()

    def toggle(self) -> bool:
        self.set(not self.dark)
        return self.dark

    def _apply(self) -> None:
        if self.apply:
            self.apply(self.dark)
