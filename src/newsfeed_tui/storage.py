from __future__ import annotations

import json
import logging
import os
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from .errors import StorageError

logger = logging.getLogger("newsfeed")


class KeyValueStore(ABC):
    """String key/value persistence that never raises past its boundary."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None when absent or unreadable."""
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> Optional[StorageError]:
        """Store a value. Returns the failure instead of raising it."""
        pass


class MemoryStore(KeyValueStore):
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> Optional[StorageError]:
        self.data[key] = value
        return None


class JsonFileStore(KeyValueStore):
    """All keys in one JSON object on disk, re-read on every access."""

    def __init__(self, path: str):
        self.path = path

    def _read_all(self) -> Dict[str, Any]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r") as f:
                data = json.load(f)
        except (IOError, OSError, ValueError) as e:
            logger.warning("Failed to read store file %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring store file %s: expected a JSON object", self.path)
            return {}
        return data

    def get(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        if value is None:
            return None
        if not isinstance(value, str):
            logger.debug("Store value for %s is not a string, ignoring", key)
            return None
        return value

    def set(self, key: str, value: str) -> Optional[StorageError]:
        data = self._read_all()
        data[key] = value
        tmp_path = f"{self.path}.tmp"
        try:
            os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
            with open(tmp_path, "w") as f:
                json.dump(data, f)
            os.replace(tmp_path, self.path)
        except (IOError, OSError, TypeError, ValueError) as e:
            logger.warning("Failed to write %s to store file %s: %s", key, self.path, e)
            return StorageError(str(e))
        logger.debug("Store set for key: %s", key)
        return None


def load_json(store: KeyValueStore, key: str, fallback: Any) -> Any:
    raw = store.get(key)
    if raw is None:
        return fallback
    try:
        return json.loads(raw)
    except ValueError as e:
        logger.warning("Discarding corrupt value for %s: %s", key, e)
        return fallback


def save_json(store: KeyValueStore, key: str, value: Any) -> Optional[StorageError]:
    try:
        raw = json.dumps(value)
    except (TypeError, ValueError) as e:
        logger.warning("Failed to encode value for %s: %s", key, e)
        return StorageError(str(e))
    return store.set(key, raw)
