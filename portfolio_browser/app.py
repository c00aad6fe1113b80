"""Main Portfolio Browser application."""

from __future__ import annotations

from pathlib import Path

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical, VerticalScroll
from textual.widgets import Input, OptionList, Static

from .core.errors import ProjectDirectoryError
from .core.projects import ProjectDirectory, default_directory, load_project_directory
from .core.registry import ContentRegistry
from .core.store import StoreSnapshot, TabStore
from .core.tab import ResolutionRequest
from .log import logger
from .preferences import (
    Preferences,
    load_preferences,
    save_home_url,
    save_show_suggestions,
    save_theme_name,
)
from .theme import TEXTUAL_THEMES, textual_theme
from .widgets import (
    AddressInput,
    NavBar,
    StatusBar,
    SuggestionList,
    TabBar,
    render_descriptor,
)


class LoadingIndicator(Static):
    """Placeholder shown while the active tab resolves its content."""

    def __init__(self) -> None:
        super().__init__("Loading…", classes="page-loading")


class BrowserApp(App):
    """A tabbed browser over the portfolio's projects."""

    CSS_PATH = "styles.tcss"
    TITLE = "Portfolio Browser"

    BINDINGS = [
        Binding("ctrl+t", "new_tab", "New tab", show=True, priority=True),
        Binding("ctrl+w", "close_tab", "Close tab", show=True, priority=True),
        Binding("ctrl+tab", "next_tab", "Next tab", show=False),
        Binding("ctrl+shift+tab", "prev_tab", "Previous tab", show=False),
        Binding("alt+left", "go_back", "Back", show=True),
        Binding("alt+right", "go_forward", "Forward", show=True),
        Binding("f5", "reload", "Reload", show=False),
        Binding("ctrl+r", "reload", "Reload", show=True),
        Binding("ctrl+l", "focus_address", "Address", show=True, priority=True),
        Binding("ctrl+h", "go_home", "Home", show=False),
        Binding("f2", "cycle_theme", "Theme", show=True),
        Binding("f3", "toggle_suggestions", "Suggestions", show=False),
        Binding("f4", "set_home", "Set home", show=False),
        Binding("ctrl+q", "quit", "Quit", show=True),
    ]

    def __init__(
        self,
        initial_urls: list[str] | None = None,
        directory: ProjectDirectory | None = None,
        prefs: Preferences | None = None,
        prefs_path: Path | None = None,
    ) -> None:
        super().__init__()
        self._prefs_path = prefs_path
        self._prefs = prefs or load_preferences(prefs_path)
        if directory is None:
            directory = self._load_directory()
        self.store = TabStore(
            ContentRegistry(directory),
            directory,
            scheduler=self._resolve_worker,
            loading_delay=self._prefs.browser.loading_delay,
            history_limit=self._prefs.browser.history_limit,
        )
        self._initial_urls = list(initial_urls or [self._prefs.browser.home_url])
        self._rendered: tuple | None = None
        self._startup_done = False

    def _load_directory(self) -> ProjectDirectory:
        path = self._prefs.projects_path
        if path is None:
            return default_directory()
        try:
            return load_project_directory(path)
        except ProjectDirectoryError:
            logger.warning("falling back to built-in projects", exc_info=True)
            return default_directory()

    # ── Layout ──────────────────────────────────────────────────

    def compose(self) -> ComposeResult:
        with Vertical(id="browser-chrome"):
            yield TabBar(id="tab-bar")
            yield NavBar(id="nav-bar")
            yield SuggestionList(id="suggestions")
        yield VerticalScroll(id="content-view")
        yield StatusBar(id="status-bar")

    def on_mount(self) -> None:
        for theme in TEXTUAL_THEMES.values():
            self.register_theme(theme)
        self.theme = textual_theme(self._prefs.display.theme).name
        self.query_one("#suggestions", SuggestionList).display = False

        self.store.subscribe(self._on_store_change)
        self._startup_done = True
        for url in self._initial_urls:
            self.store.open_tab(url)

    # ── Store wiring ────────────────────────────────────────────

    @work(group="resolve", exit_on_error=False)
    async def _resolve_worker(self, request: ResolutionRequest) -> None:
        await self.store.resolve(request)

    def _on_store_change(self, snapshot: StoreSnapshot) -> None:
        if self._startup_done:
            self._render_snapshot(snapshot)

    def _render_snapshot(self, snapshot: StoreSnapshot) -> None:
        self.query_one("#tab-bar", TabBar).update_tabs(snapshot)
        active = snapshot.active_tab
        nav = self.query_one("#nav-bar", NavBar)
        content = self.query_one("#content-view", VerticalScroll)

        if active is None:
            nav.set_history_state(False, False)
            nav.set_address("")
            content.remove_children()
            self._rendered = None
            self._update_status("No tabs", "", "")
            return

        self.sub_title = active.title
        nav.set_history_state(active.can_go_back, active.can_go_forward)
        nav.set_address(active.url)
        position = f"{active.history_index + 1}/{len(active.history)}"
        self._update_status("Loading…" if active.is_loading else "Ready", active.url, position)

        key = (active.tab_id, active.is_loading, id(active.descriptor))
        if key == self._rendered:
            return
        self._rendered = key
        content.remove_children()
        if active.is_loading or active.descriptor is None:
            content.mount(LoadingIndicator())
        else:
            content.mount_all(render_descriptor(active.descriptor))
            content.scroll_home(animate=False)

    def _update_status(self, state: str, url: str, position: str) -> None:
        self.query_one("#status-bar", StatusBar).show(state, url, position)

    # ── Tab operations ──────────────────────────────────────────

    def switch_to_tab(self, tab_id: str) -> None:
        self.store.switch_tab(tab_id)

    def close_tab(self, tab_id: str) -> None:
        self.store.close_tab(tab_id)
        # Never leave the window without a tab
        if not len(self.store):
            self.store.open_tab(self._prefs.browser.home_url)

    def navigate_active(self, target: str, *, raw: bool = True) -> None:
        tab_id = self.store.active_tab_id
        if tab_id is None:
            self.store.open_tab(self._prefs.browser.home_url)
            tab_id = self.store.active_tab_id
        self.query_one("#suggestions", SuggestionList).dismiss()
        self.store.navigate(tab_id, target, raw=raw)
        self.query_one("#content-view").focus()

    # ── Actions ─────────────────────────────────────────────────

    def action_new_tab(self) -> None:
        self.store.open_tab(self._prefs.browser.home_url)
        self.action_focus_address()

    def action_close_tab(self) -> None:
        if self.store.active_tab_id is not None:
            self.close_tab(self.store.active_tab_id)

    def action_next_tab(self) -> None:
        self.store.cycle_tab(1)

    def action_prev_tab(self) -> None:
        self.store.cycle_tab(-1)

    def action_go_back(self) -> None:
        if self.store.active_tab_id is not None:
            self.store.go_back(self.store.active_tab_id)

    def action_go_forward(self) -> None:
        if self.store.active_tab_id is not None:
            self.store.go_forward(self.store.active_tab_id)

    def action_reload(self) -> None:
        if self.store.active_tab_id is not None:
            self.store.reload(self.store.active_tab_id)

    def action_go_home(self) -> None:
        """Open the home page in a new tab."""
        self.store.open_tab(self._prefs.browser.home_url)

    def action_focus_address(self) -> None:
        address = self.query_one("#address-input", AddressInput)
        address.focus()
        address.cursor_position = len(address.value)

    # ── Preference actions ──────────────────────────────────────

    def action_cycle_theme(self) -> None:
        """Switch to the next theme and remember it."""
        names = list(TEXTUAL_THEMES)
        current = self._prefs.display.theme
        index = names.index(current) if current in names else -1
        name = names[(index + 1) % len(names)]
        self._prefs.display.theme = name
        self.theme = textual_theme(name).name
        save_theme_name(name, self._prefs_path)
        self.notify(f"Theme: {name}")

    def action_toggle_suggestions(self) -> None:
        enabled = not self._prefs.display.show_suggestions
        self._prefs.display.show_suggestions = enabled
        save_show_suggestions(enabled, self._prefs_path)
        if not enabled:
            self.query_one("#suggestions", SuggestionList).dismiss()
        self.notify(f"Suggestions {'on' if enabled else 'off'}")

    def action_set_home(self) -> None:
        """Make the active tab's address the home page for new tabs."""
        active = self.store.snapshot().active_tab
        if active is None:
            return
        self._prefs.browser.home_url = active.url
        save_home_url(active.url, self._prefs_path)
        self.notify(f"Home page: {active.url}")

    # ── Address bar events ──────────────────────────────────────

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id != "address-input" or not event.input.has_focus:
            return
        suggestions = self.query_one("#suggestions", SuggestionList)
        if self._prefs.display.show_suggestions:
            suggestions.show_suggestions(self.store.suggest(event.value))
        else:
            suggestions.dismiss()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "address-input":
            self.navigate_active(event.value, raw=True)

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        suggestions = self.query_one("#suggestions", SuggestionList)
        suggestion = suggestions.suggestion_at(event.option_index)
        if suggestion is None:
            return
        if suggestion.url:
            self.navigate_active(suggestion.url, raw=False)
        else:
            self.navigate_active(suggestion.text, raw=True)


# ── Entry Point ─────────────────────────────────────────────────────


def run_app(
    initial_urls: list[str] | None = None,
    directory: ProjectDirectory | None = None,
    prefs: Preferences | None = None,
    prefs_path: Path | None = None,
) -> None:
    """Run the Portfolio Browser application."""
    app = BrowserApp(
        initial_urls=initial_urls, directory=directory, prefs=prefs, prefs_path=prefs_path
    )
    app.run()
