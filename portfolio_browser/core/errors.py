"""Exception taxonomy for the browser core.

There is no ``MalformedUrl``: every string resolves, since the
scheme resolver's last rule is a catch-all fallback to the home page.
"""

from __future__ import annotations


class BrowserError(Exception):
    """Base class for errors raised by the browser core."""


class TabNotFound(BrowserError, LookupError):
    """An operation referenced a tab id the store does not hold."""

    def __init__(self, tab_id: str) -> None:
        super().__init__(f"No tab with id {tab_id!r}")
        self.tab_id = tab_id


class ContentNotFound(BrowserError, LookupError):
    """The content registry has nothing to render for a resolved target."""

    def __init__(self, content_type: str, content_id: str | None = None) -> None:
        what = f"{content_type}:{content_id}" if content_id else content_type
        super().__init__(f"No content for {what}")
        self.content_type = content_type
        self.content_id = content_id


class ProjectDirectoryError(BrowserError):
    """A project directory file could not be read or is malformed."""
