"""Navigation bar, address input, suggestion dropdown and status bar."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.widgets import Input, OptionList, Static
from textual.widgets.option_list import Option

from ..core.search import Suggestion

_TYPE_GLYPHS = {
    "project": "◆",
    "url": "→",
    "search": "⌕",
    "history": "↺",
}


class AddressInput(Input):
    """Address bar: Enter navigates, Down moves into the suggestion list."""

    async def _on_key(self, event) -> None:
        if event.key == "down":
            suggestions = self.app.query_one("#suggestions", SuggestionList)
            if suggestions.display and suggestions.option_count:
                event.prevent_default()
                event.stop()
                suggestions.focus()
                suggestions.highlighted = 0
                return
        elif event.key == "escape":
            event.prevent_default()
            event.stop()
            self.app.query_one("#suggestions", SuggestionList).dismiss()
            return
        await super()._on_key(event)


class NavBar(Horizontal):
    """Back / forward / reload / home buttons plus the address bar."""

    def compose(self) -> ComposeResult:
        yield Static(" ← ", id="nav-back", classes="nav-btn")
        yield Static(" → ", id="nav-forward", classes="nav-btn")
        yield Static(" ⟳ ", id="nav-reload", classes="nav-btn")
        yield Static(" ⌂ ", id="nav-home", classes="nav-btn")
        yield AddressInput(placeholder="Search or enter address", id="address-input")

    def set_history_state(self, can_go_back: bool, can_go_forward: bool) -> None:
        self.query_one("#nav-back").set_class(not can_go_back, "nav-disabled")
        self.query_one("#nav-forward").set_class(not can_go_forward, "nav-disabled")

    def set_address(self, url: str) -> None:
        address = self.query_one("#address-input", AddressInput)
        if not address.has_focus:
            address.value = url

    def on_click(self, event) -> None:
        """Route clicks on the navigation buttons."""
        target = event.widget
        if target is None or target.has_class("nav-disabled"):
            return
        if target.id == "nav-back":
            self.app.action_go_back()
        elif target.id == "nav-forward":
            self.app.action_go_forward()
        elif target.id == "nav-reload":
            self.app.action_reload()
        elif target.id == "nav-home":
            self.app.action_go_home()


class SuggestionList(OptionList):
    """Dropdown of address-bar suggestions, hidden while empty."""

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._suggestions: list[Suggestion] = []

    @property
    def suggestions(self) -> list[Suggestion]:
        return list(self._suggestions)

    def show_suggestions(self, suggestions: list[Suggestion]) -> None:
        self._suggestions = list(suggestions)
        self.clear_options()
        if not suggestions:
            self.display = False
            return
        options = []
        for i, suggestion in enumerate(suggestions):
            prompt = Text()
            prompt.append(f"{_TYPE_GLYPHS.get(suggestion.type, ' ')} ")
            prompt.append(suggestion.text)
            prompt.append(f"  {suggestion.type}", style="dim")
            options.append(Option(prompt, id=f"suggestion-{i}"))
        self.add_options(options)
        self.display = True

    def suggestion_at(self, index: int) -> Suggestion | None:
        if 0 <= index < len(self._suggestions):
            return self._suggestions[index]
        return None

    def dismiss(self) -> None:
        self.show_suggestions([])


class StatusBar(Horizontal):
    """Bottom line: load state, current URL and history position."""

    def compose(self) -> ComposeResult:
        yield Static("Ready", id="status-state")
        yield Static("", id="status-url")
        yield Static("", id="status-history")

    def show(self, state: str, url: str, position: str) -> None:
        self.query_one("#status-state", Static).update(state)
        self.query_one("#status-url", Static).update(Text(url))
        self.query_one("#status-history", Static).update(position)
