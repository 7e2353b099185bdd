from __future__ import annotations

import logging
import webbrowser
from typing import Any, Callable, Dict, List, Optional

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.command import Hit, Hits, Provider
from textual.containers import Vertical
from textual.screen import Screen
from textual.worker import Worker, WorkerState
from textual.widgets import Header, Input, ListView, LoadingIndicator

from .config import DEFAULT_CONFIG, UI_DEFAULTS
from .datamodels import FeedEnvelope, NewsItem
from .errors import FetchError
from .favorites import FavoritesStore
from .fetcher import FeedFetcher
from .filtering import filter_items
from .query import DebouncedQuery
from .scheduler import RefreshScheduler
from .screens import ArticleScreen
from .state import FeedState
from .storage import JsonFileStore, KeyValueStore
from .themes import ThemeController, detect_system_dark
from .timers import Clock, TextualClock
from .widgets import EmptyState, ErrorBanner, NewsCard, StatusBar, format_timestamp

logger = logging.getLogger("newsfeed")


class FeedCommandProvider(Provider):
    def _commands(self) -> List[tuple[str, Callable[[], Any]]]:
        app = self.app
        return [
            ("Refresh feed", app.action_refresh),
            ("Toggle dark mode", app.action_toggle_theme),
            ("Clear search", app.action_clear_search),
        ]

    async def search(self, query: str) -> Hits:
        """Search the feed commands."""
        matcher = self.matcher(query)

        for name, callback in self._commands():
            score = matcher.match(name)
            if score > 0:
                yield Hit(score, matcher.highlight(name), callback, help=name)


class NewsFeedApp(App):
    TITLE = "News Feed"
    SUB_TITLE = "Latest headlines"

    CSS_PATH = "app.css"

    COMMANDS = App.COMMANDS | {FeedCommandProvider}

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("r", "refresh", "Refresh"),
        Binding("f", "favorite", "Favorite"),
        Binding("d", "toggle_theme", "Dark/Light"),
        Binding("o", "open_in_browser", "Open"),
        Binding("/", "focus_search", "Search"),
        Binding("escape", "clear_search", "Clear search", show=False),
        Binding("ctrl+p", "command_palette", "Commands"),
    ]

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        fetcher: Optional[FeedFetcher] = None,
        store: Optional[KeyValueStore] = None,
        system_signal: Optional[Callable[[], Optional[bool]]] = None,
        clock: Optional[Clock] = None,
        dark_override: Optional[bool] = None,
        **kwargs: Any,
    ):
        super().__init__(**kwargs)
        self.config = {**DEFAULT_CONFIG, **(config or {})}
        self.fetcher = fetcher or FeedFetcher(
            self.config["base_url"],
            path=self.config["feed_path"],
            timeout=self.config["timeout"],
        )
        self.store = store or JsonFileStore(self.config["storage_path"])
        self.clock = clock or TextualClock(self)
        self.dark_override = dark_override

        self.feed = FeedState()
        self.visible_items: List[NewsItem] = []
        self.favorites = FavoritesStore(self.store)
        self.theme_controller = ThemeController(
            self.store,
            system_signal=system_signal or detect_system_dark,
            apply=self._apply_dark,
        )
        self.search = DebouncedQuery(
            self.clock,
            on_commit=self._on_query_committed,
            delay=float(self.config["debounce"]),
        )
        self.scheduler = RefreshScheduler(
            self.clock,
            self.load_feed,
            interval=float(self.config["refresh_interval"]),
        )
        self._main_screen: Optional[Screen] = None

    @property
    def main_screen(self) -> Screen:
        """The screen holding the feed, even while another screen is on top."""
        return self._main_screen or self.screen

    def get_keybinding_style(self) -> str:
        return "$accent"

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="main"):
            yield Input(
                placeholder="Search title or description (press / to search)",
                id="search",
            )
            yield ErrorBanner(id="error-banner")
            yield LoadingIndicator(id="skeleton")
            yield ListView(id="news-list")
            yield EmptyState(id="empty-state")
        yield StatusBar()

    def on_mount(self) -> None:
        self._main_screen = self.screen
        self.favorites.load()

        if self.dark_override is None:
            self.theme_controller.initialize()
        else:
            # One-run override; the saved preference is left alone.
            self.theme_controller.dark = self.dark_override
            self._apply_dark(self.dark_override)

        self.main_screen.query_one(ErrorBanner).clear_error()
        self.main_screen.query_one(EmptyState).display = False

        keybindings_text = self.config.get("ui", {}).get(
            "statusbar_keybindings", UI_DEFAULTS["statusbar_keybindings"]
        )
        self.main_screen.query_one(StatusBar).set_keybindings(
            keybindings_text.format(color=self.get_keybinding_style())
        )
        self.main_screen.query_one("#news-list", ListView).focus()

        self.scheduler.activate()

    def on_unmount(self) -> None:
        self.scheduler.deactivate()
        self.search.teardown()

    # --- Feed loading ---
    def load_feed(self) -> None:
        self.feed.begin()
        self._update_status()
        self.run_worker(
            self.fetcher.fetch,
            name="feed_loader",
            group="feed",
            thread=True,
            exit_on_error=False,
        )

    def on_worker_state_changed(self, event: Worker.StateChanged) -> None:
        if getattr(event.worker, "name", None) != "feed_loader":
            return

        if event.state is WorkerState.SUCCESS:
            envelope = event.worker.result or FeedEnvelope()
            self.feed.succeed(envelope)
            logger.info("Loaded %d items", len(envelope.news))
            self._render_list()
        elif event.state is WorkerState.ERROR:
            error = event.worker.error
            if not isinstance(error, FetchError):
                error = FetchError(str(error) or "Failed to load news")
            logger.error("Feed loader failed: %s", error)
            self.feed.fail(error)
        elif event.state is WorkerState.CANCELLED:
            self.feed.loading = False
        else:
            return
        self._update_status()

    def _update_status(self) -> None:
        banner = self.main_screen.query_one(ErrorBanner)
        if self.feed.error is not None:
            banner.show_error(self.feed.error_message)
        else:
            banner.clear_error()

        status = self.main_screen.query_one(StatusBar)
        status.loading_status = "Loading..." if self.feed.loading else ""
        if self.feed.loaded_once:
            status.updated_at = format_timestamp(self.feed.scraped_at)

        skeleton = self.feed.show_skeleton
        self.main_screen.query_one("#skeleton", LoadingIndicator).display = skeleton
        if skeleton:
            self.main_screen.query_one("#news-list", ListView).display = False
            self.main_screen.query_one(EmptyState).display = False
        elif not self.feed.loaded_once:
            self.main_screen.query_one(EmptyState).display = True

    def _render_list(self) -> None:
        self.visible_items = filter_items(self.feed.items, self.search.normalized)

        news_list = self.main_screen.query_one("#news-list", ListView)
        news_list.clear()
        news_list.extend(
            NewsCard(item, favorite=self.favorites.is_favorite(item.link))
            for item in self.visible_items
        )

        has_items = bool(self.visible_items)
        news_list.display = has_items
        self.main_screen.query_one(EmptyState).display = not has_items
        typing = isinstance(self.focused, Input)
        if has_items and not typing and self.screen is self.main_screen:
            news_list.focus()
        self._update_subtitle()

    def _update_subtitle(self) -> None:
        self.sub_title = (
            f"{len(self.visible_items)} of {len(self.feed.items)} articles"
            f" · {len(self.favorites)} favorites"
        )

    # --- Search ---
    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "search":
            self.search.on_input(event.value)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "search":
            self.main_screen.query_one("#news-list", ListView).focus()

    def _on_query_committed(self, normalized: str) -> None:
        if self.feed.loaded_once:
            self._render_list()

    def action_focus_search(self) -> None:
        """Focus the search input."""
        if self.screen is not self.main_screen:
            return
        self.main_screen.query_one("#search", Input).focus()

    def action_clear_search(self) -> None:
        if self.screen is not self.main_screen:
            return
        search_input = self.main_screen.query_one("#search", Input)
        if not search_input.value and not self.search.normalized:
            return
        search_input.value = ""
        self.search.clear()
        search_input.focus()

    # --- Items ---
    def _highlighted_item(self) -> Optional[NewsItem]:
        news_list = self.main_screen.query_one("#news-list", ListView)
        card = news_list.highlighted_child
        if isinstance(card, NewsCard):
            return card.item
        return None

    def toggle_favorite(self, item: NewsItem) -> None:
        if not item.link:
            return
        self.favorites.toggle(item.link)
        favorite = self.favorites.is_favorite(item.link)
        for card in self.main_screen.query(NewsCard):
            if card.item.link == item.link:
                card.set_favorite(favorite)
        self._update_subtitle()
        self.notify("Added to favorites" if favorite else "Removed from favorites")

    def action_favorite(self) -> None:
        item = self._highlighted_item()
        if item is not None:
            self.toggle_favorite(item)

    def action_open_in_browser(self) -> None:
        item = self._highlighted_item()
        if item is not None and item.link:
            webbrowser.open(item.link)

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        if isinstance(event.item, NewsCard):
            self.push_screen(ArticleScreen(event.item.item))

    # --- Refresh and theme ---
    def action_refresh(self) -> None:
        self.scheduler.refresh_now()

    def action_toggle_theme(self) -> None:
        self.theme_controller.toggle()

    def _apply_dark(self, dark: bool) -> None:
        name = self.config.get("dark_theme" if dark else "light_theme")
        if name not in self.available_themes:
            logger.warning("Theme '%s' not found, using the built-in one.", name)
            name = "textual-dark" if dark else "textual-light"
        self.theme = name
