"""Widget classes for the browser window."""

from .bars import AddressInput, NavBar, StatusBar, SuggestionList
from .pages import PageAction, PageLink, render_descriptor
from .tabs import NewTabButton, TabBar, TabButton, TabCloseButton

__all__ = [
    "AddressInput",
    "NavBar",
    "NewTabButton",
    "PageAction",
    "PageLink",
    "StatusBar",
    "SuggestionList",
    "TabBar",
    "TabButton",
    "TabCloseButton",
    "render_descriptor",
]
