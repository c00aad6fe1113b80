"""Tab strip widgets for the portfolio browser."""

from __future__ import annotations

from textual.containers import Horizontal
from textual.widgets import Static

from ..core.store import StoreSnapshot

_MAX_LABEL_LEN = 22


def tab_label(title: str, is_loading: bool) -> str:
    """Tab caption, truncated, with a spinner glyph while loading."""
    if len(title) > _MAX_LABEL_LEN:
        title = title[: _MAX_LABEL_LEN - 1] + "…"
    return f"◌ {title}" if is_loading else title


class TabButton(Static):
    """A clickable tab label in the tab strip."""

    def __init__(self, label: str, tab_id: str, **kwargs) -> None:
        super().__init__(label, **kwargs)
        self.tab_id = tab_id


class TabCloseButton(Static):
    """The close glyph next to a tab label."""

    def __init__(self, tab_id: str, **kwargs) -> None:
        super().__init__("✕", **kwargs)
        self.tab_id = tab_id


class NewTabButton(Static):
    def __init__(self, **kwargs) -> None:
        super().__init__(" + ", **kwargs)


class TabBar(Horizontal):
    """Horizontal tab strip mirroring the store's tab order."""

    def update_tabs(self, snapshot: StoreSnapshot) -> None:
        """Rebuild the tab buttons."""
        self.remove_children()
        closable = len(snapshot.tabs) > 1
        for tab in snapshot.tabs:
            cls = "tab-btn tab-active" if tab.is_active else "tab-btn tab-inactive"
            self.mount(
                TabButton(f" {tab_label(tab.title, tab.is_loading)} ", tab.tab_id, classes=cls)
            )
            # The last remaining tab cannot be closed from the strip
            if closable:
                self.mount(TabCloseButton(tab.tab_id, classes="tab-close"))
        self.mount(NewTabButton(classes="new-tab-btn"))

    def on_click(self, event) -> None:
        """Route clicks on tab labels, close glyphs and the new-tab button."""
        target = event.widget
        if isinstance(target, TabCloseButton):
            self.app.close_tab(target.tab_id)
        elif isinstance(target, TabButton):
            self.app.switch_to_tab(target.tab_id)
        elif isinstance(target, NewTabButton):
            self.app.action_new_tab()
