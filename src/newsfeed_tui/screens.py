from __future__ import annotations

import logging
import webbrowser

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import VerticalScroll
from textual.screen import Screen
from textual.widgets import Header, Markdown

from .datamodels import NewsItem
from .widgets import FAVORITE_OFF, FAVORITE_ON, StatusBar

logger = logging.getLogger("newsfeed")


def item_markdown(item: NewsItem) -> str:
    parts = [f"# {item.title or 'Untitled'}\n"]
    if item.description:
        parts.append(f"{item.description}\n")
    parts.append(f"[Read article]({item.link})\n")
    if item.image_url:
        parts.append(f"Image: <{item.image_url}>\n")
    return "\n".join(parts)


# --- Article screen ---
class ArticleScreen(Screen):
    BINDINGS = [
        Binding("escape,q,left", "app.pop_screen", "Back"),
        Binding("o", "open_in_browser", "Open in browser"),
        Binding("f", "toggle_favorite", "Favorite"),
        Binding("down", "scroll_down", "Scroll Down"),
        Binding("up", "scroll_up", "Scroll Up"),
    ]

    def __init__(self, item: NewsItem):
        super().__init__()
        self.item = item

    def compose(self) -> ComposeResult:
        yield Header()
        yield VerticalScroll(
            Markdown(item_markdown(self.item), id="article-markdown"),
            id="article-scroll",
        )
        yield StatusBar()

    def on_mount(self) -> None:
        self.title = self.item.title
        self.query_one("#article-scroll").focus()
        self._update_status()

    def _update_status(self) -> None:
        style = self.app.get_keybinding_style()
        marker = FAVORITE_ON if self.app.favorites.is_favorite(self.item.link) else FAVORITE_OFF
        self.query_one(StatusBar).set_keybindings(
            f"{marker}  [b {style}]o[/] to open, [b {style}]f[/] to favorite, "
            f"[b {style}]esc[/] to go back"
        )

    def action_open_in_browser(self) -> None:
        if not self.item.link:
            return
        logger.debug("Opening %s in browser", self.item.link)
        webbrowser.open(self.item.link)

    def action_toggle_favorite(self) -> None:
        self.app.toggle_favorite(self.item)
        self._update_status()

    def action_scroll_down(self) -> None:
        self.query_one("#article-scroll").scroll_down()

    def action_scroll_up(self) -> None:
        self.query_one("#article-scroll").scroll_up()
