from __future__ import annotations

import re
from datetime import datetime
from typing import Optional

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.reactive import reactive
from textual.widgets import ListItem, Static

from .datamodels import NewsItem

FAVORITE_ON = "♥"
FAVORITE_OFF = "♡"
DESCRIPTION_LIMIT = 240

_FRACTION = re.compile(r"\.(\d+)")


def format_timestamp(value: Optional[str]) -> str:
    """Render an ISO timestamp as local ``DD Mon YYYY, HH:MM``."""
    if not value:
        return "—"
    try:
        # fromisoformat on 3.10 only takes 3 or 6 fractional digits.
        text = _FRACTION.sub(
            lambda m: "." + m.group(1)[:6].ljust(6, "0"), value.replace("Z", "+00:00")
        )
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return value
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone()
    return parsed.strftime("%d %b %Y, %H:%M")


def _truncate(text: str, limit: int = DESCRIPTION_LIMIT) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - 1].rstrip() + "…"


# --- UI Widgets ---
class NewsCard(ListItem):
    def __init__(self, item: NewsItem, favorite: bool = False):
        super().__init__(classes="favorite" if favorite else None)
        self.item = item
        self.favorite = favorite

    def compose(self) -> ComposeResult:
        with Horizontal(classes="card-container"):
            yield Static(self._marker(), classes="card-fav")
            with Vertical(classes="card-body"):
                yield Static(Text(self.item.title), classes="card-title")
                if self.item.description:
                    yield Static(
                        Text(_truncate(self.item.description)), classes="card-desc"
                    )
                yield Static(Text(self.item.link), classes="card-link")

    def _marker(self) -> str:
        return FAVORITE_ON if self.favorite else FAVORITE_OFF

    def set_favorite(self, favorite: bool) -> None:
        self.favorite = favorite
        self.set_class(favorite, "favorite")
        if self.is_mounted:
            self.query_one(".card-fav", Static).update(self._marker())


class StatusBar(Static):
    loading_status = reactive("")
    updated_at = reactive("")
    keybinding_hint = reactive("")

    def on_mount(self) -> None:
        self.update_display()

    def set_keybindings(self, hint: str) -> None:
        """Set the keybinding hint text."""
        self.keybinding_hint = hint

    def update_display(self) -> None:
        """Update the status bar display."""
        status_items = []
        if self.loading_status:
            status_items.append(self.loading_status)

        if self.updated_at:
            status_items.append(f"Updated {self.updated_at}")

        if self.keybinding_hint:
            status_items.append(self.keybinding_hint)

        self.update(" | ".join(status_items))

    def watch_loading_status(self, loading_status: str) -> None:
        self.update_display()

    def watch_updated_at(self, updated_at: str) -> None:
        self.update_display()

    def watch_keybinding_hint(self, keybinding_hint: str) -> None:
        self.update_display()


class ErrorBanner(Static):
    def show_error(self, message: str) -> None:
        self.update(
            Text.assemble(
                ("Error: ", "bold red"),
                (message, "red"),
                ("  press r to retry", "dim"),
            )
        )
        self.display = True

    def clear_error(self) -> None:
        self.update("")
        self.display = False


class EmptyState(Vertical):
    def compose(self) -> ComposeResult:
        yield Static("No news found", classes="empty-title")
        yield Static(
            "Try clearing the search (escape) or refreshing (r).",
            classes="empty-sub",
        )
