from __future__ import annotations

import logging
from typing import FrozenSet

from .config import STORAGE_KEYS
from .storage import KeyValueStore, load_json, save_json

logger = logging.getLogger("newsfeed")


def toggle(favorites: FrozenSet[str], link: str) -> FrozenSet[str]:
    if link in favorites:
        return favorites - {link}
    return favorites | {link}


class FavoritesStore:
    """Favorite article links, mirrored to the key-value store on each change."""

    def __init__(self, store: KeyValueStore, key: str = STORAGE_KEYS["favs"]):
        self.store = store
        self.key = key
        self._favorites: FrozenSet[str] = frozenset()

    @property
    def favorites(self) -> FrozenSet[str]:
        return self._favorites

    def __len__(self) -> int:
        return len(self._favorites)

    def __contains__(self, link: str) -> bool:
        return link in self._favorites

    def is_favorite(self, link: str) -> bool:
        return link in self._favorites

    def load(self) -> FrozenSet[str]:
        data = load_json(self.store, self.key, [])
        if not isinstance(data, list):
            logger.warning("Ignoring stored favorites: expected a list")
            data = []
        self._favorites = frozenset(link for link in data if isinstance(link, str))
        logger.debug("Loaded %d favorites", len(self._favorites))
        return self._favorites

    def toggle(self, link: str) -> FrozenSet[str]:
        self._favorites = toggle(self._favorites, link)
        error = save_json(self.store, self.key, sorted(self._favorites))
        if error is not None:
            logger.info("Favorites kept in memory only: %s", error)
        return self._favorites
