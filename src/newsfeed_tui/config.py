from __future__ import annotations

import json
import logging
import os
from datetime import datetime
from typing import Any, Dict, Optional

# --- Configuration ---
DEFAULT_BASE_URL = "http://localhost:3000"
API_PATH = "/api/news"
HTTP_TIMEOUT = 15
RETRY_ATTEMPTS = 2
AUTO_REFRESH_SECONDS = 60 * 5
DEBOUNCE_SECONDS = 0.25

CONFIG_DIR = os.path.expanduser("~/.config/newsfeed")
CONFIG_PATH = os.path.join(CONFIG_DIR, "config.json")
STORAGE_PATH = os.path.join(CONFIG_DIR, "storage.json")

STORAGE_KEYS = {
    "theme": "newsfeed_theme",
    "favs": "newsfeed_favs",
}

REQUEST_HEADERS = {
    "User-Agent": "newsfeed-tui/0.1",
    "Accept": "application/json",
}
NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache, no-store",
    "Pragma": "no-cache",
}

DEFAULT_CONFIG: Dict[str, Any] = {
    "base_url": DEFAULT_BASE_URL,
    "feed_path": API_PATH,
    "refresh_interval": AUTO_REFRESH_SECONDS,
    "debounce": DEBOUNCE_SECONDS,
    "timeout": HTTP_TIMEOUT,
    "dark_theme": "textual-dark",
    "light_theme": "textual-light",
    "storage_path": STORAGE_PATH,
}

# Default UI settings
UI_DEFAULTS = {
    "statusbar_keybindings": (
        "[b {color}]/[/] search  [b {color}]f[/] favorite  "
        "[b {color}]d[/] theme  [b {color}]r[/] refresh"
    ),
}

# --- Logging ---
logger = logging.getLogger("newsfeed")


def setup_logging(debug: bool = False) -> Optional[str]:
    """Configure logging."""
    if not debug:
        logging.basicConfig(level=logging.CRITICAL, handlers=[logging.NullHandler()])
        return None

    ts = datetime.now().strftime("%Y%m%dT%H%M%S")
    pid = os.getpid()
    debug_path = f"/tmp/newsfeed_debug_{ts}_{pid}.log"

    logging.basicConfig(
        level=logging.DEBUG,
        filename=debug_path,
        filemode="a",
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )

    logger.debug("Debug logging enabled to %s", debug_path)
    return debug_path


def ensure_config_file_exists(path: str = CONFIG_PATH) -> None:
    """Write the default config file if the user's config file is not found."""
    if os.path.exists(path):
        return
    logger.info("Config file not found at %s, creating default.", path)
    try:
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "w") as f:
            json.dump(DEFAULT_CONFIG, f, indent=2)
    except (IOError, OSError) as e:
        logger.error("Failed to create default config file: %s", e)


def load_config(path: str = CONFIG_PATH) -> Dict[str, Any]:
    """Load the main configuration file, filling in defaults for missing keys."""
    ensure_config_file_exists(path)
    config = dict(DEFAULT_CONFIG)
    try:
        with open(path, "r") as f:
            user_config = json.load(f)
        if isinstance(user_config, dict):
            config.update(user_config)
            logger.info("Loaded config from %s", path)
        else:
            logger.error("Ignoring config at %s: expected a JSON object", path)
    except (IOError, json.JSONDecodeError) as e:
        logger.error("Failed to load config from %s: %s", path, e)
    return config


def save_config(config: Dict[str, Any], path: str = CONFIG_PATH) -> None:
    """Save the main configuration file."""
    try:
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "w") as f:
            json.dump(config, f, indent=2)
        logger.info("Saved config to %s", path)
    except IOError as e:
        logger.error("Failed to save config to %s: %s", path, e)
