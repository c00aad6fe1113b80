"""Module-level constants for the portfolio browser."""

from __future__ import annotations

from pathlib import Path

# Content types a navigation target can resolve to
CONTENT_HOME = "home"
CONTENT_PROJECT = "project"
CONTENT_SEARCH = "search"
CONTENT_HTML = "html"

CONTENT_TYPES: tuple[str, ...] = (
    CONTENT_HOME,
    CONTENT_PROJECT,
    CONTENT_SEARCH,
    CONTENT_HTML,
)

# Pseudo-URL prefixes.  Order matters: "project:" must be tested as an
# exact prefix so that "projects:" never matches it and vice versa.
HOME_URL = "home"
PROJECT_PREFIX = "project:"
PROJECTS_PREFIX = "projects:"
SEARCH_PREFIX = "search:"
DATA_PREFIX = "data:"
ALL_PROJECTS_SUFFIX = "all"
ALL_PROJECTS_URL = PROJECTS_PREFIX + ALL_PROJECTS_SUFFIX

# Component ids in the content registry
HOME_COMPONENT_ID = "browser-home"
PROJECT_COMPONENT_ID = "browser-project"
ERROR_COMPONENT_ID = "browser-error"
SEARCH_COMPONENT_ID = "browser-search"
HTML_COMPONENT_ID = "browser-html"
ALL_PROJECTS_COMPONENT_ID = "all-projects"

# Titles
HOME_TITLE = "Home"
ALL_PROJECTS_TITLE = "All Projects"
FALLBACK_TITLE = "Browser"

# Suggestions
MAX_SUGGESTIONS = 8

# History
DEFAULT_HISTORY_LIMIT = 50

# Simulated registry latency (seconds)
DEFAULT_LOADING_DELAY = 0.3

# On-disk locations (preferences and log file only; browsing state is never saved)
BROWSER_HOME = Path.home() / ".portfolio-browser"
