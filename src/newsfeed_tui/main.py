#!/usr/bin/env python3
# -*- coding: utf-8 -*-
from __future__ import annotations

import argparse
import logging
import sys

from .app import NewsFeedApp
from .config import load_config, setup_logging

logger = logging.getLogger("newsfeed")


# --- Entrypoint ---
def main() -> None:
    parser = argparse.ArgumentParser(description="News Feed TUI Client")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--url",
        type=str,
        help="Base URL of the news backend for this run (e.g. http://localhost:3000)",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--dark", dest="dark", action="store_const", const=True, help="Use dark mode for this run"
    )
    mode.add_argument(
        "--light", dest="dark", action="store_const", const=False, help="Use light mode for this run"
    )
    args = parser.parse_args()

    debug_path = setup_logging(args.debug)
    if debug_path:
        print(f"Debug logging enabled: {debug_path}", file=sys.stderr)

    config = load_config()
    if args.url:
        config["base_url"] = args.url

    logger.info("Using backend: %s%s", config["base_url"], config["feed_path"])

    try:
        app = NewsFeedApp(config=config, dark_override=args.dark)
        app.run()
    except Exception as e:
        logger.exception("Application crashed: %s", e)
        print(f"Application crashed: {e}", file=sys.stderr)


if __name__ == "__main__":
    main()
