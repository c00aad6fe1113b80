"""User preferences for the portfolio browser.

Loads settings from ~/.portfolio-browser/preferences.yaml.
Falls back to sensible defaults if the file doesn't exist or is invalid.
Creates a default file on first run so users can discover and edit it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .core.constants import (
    BROWSER_HOME,
    DEFAULT_HISTORY_LIMIT,
    DEFAULT_LOADING_DELAY,
    HOME_URL,
)
from .log import logger

PREFS_PATH = BROWSER_HOME / "preferences.yaml"

_DEFAULT_YAML = """\
# Portfolio Browser Preferences
# Delete this file to reset to defaults.

browser:
  home_url: "home"               # page opened by new tabs
  history_limit: 50              # back/forward entries kept per tab
  loading_delay: 0.3             # simulated page load time in seconds
  projects_file: ""              # YAML project directory (empty = built-in projects)

display:
  theme: "dark"                  # dark | light | solarized
  show_suggestions: true         # address-bar suggestion dropdown
"""


@dataclass
class BrowserPreferences:
    """Navigation behaviour."""

    home_url: str = HOME_URL
    history_limit: int = DEFAULT_HISTORY_LIMIT
    loading_delay: float = DEFAULT_LOADING_DELAY
    projects_file: str = ""  # Empty means use the built-in project directory


@dataclass
class DisplayPreferences:
    """Display settings for the browser window."""

    theme: str = "dark"
    show_suggestions: bool = True


@dataclass
class Preferences:
    """Top-level browser preferences."""

    browser: BrowserPreferences = field(default_factory=BrowserPreferences)
    display: DisplayPreferences = field(default_factory=DisplayPreferences)

    @property
    def projects_path(self) -> Path | None:
        if not self.browser.projects_file:
            return None
        return Path(self.browser.projects_file).expanduser()


def _load_browser(prefs: Preferences, bdata: dict) -> None:
    if bdata.get("home_url"):
        prefs.browser.home_url = str(bdata["home_url"])
    if "history_limit" in bdata:
        try:
            limit = int(bdata["history_limit"])
        except (TypeError, ValueError):
            logger.debug("ignoring history_limit %r", bdata["history_limit"])
        else:
            if limit >= 1:
                prefs.browser.history_limit = limit
    if "loading_delay" in bdata:
        try:
            delay = float(bdata["loading_delay"])
        except (TypeError, ValueError):
            logger.debug("ignoring loading_delay %r", bdata["loading_delay"])
        else:
            prefs.browser.loading_delay = max(0.0, delay)
    if "projects_file" in bdata:
        prefs.browser.projects_file = str(bdata["projects_file"] or "")


def load_preferences(path: Path | None = None) -> Preferences:
    """Load preferences from YAML file.

    Falls back to sensible defaults if the file doesn't exist or is invalid.
    Creates a default preferences file on first run.
    """
    path = path or PREFS_PATH
    prefs = Preferences()

    if path.exists():
        try:
            data = yaml.safe_load(path.read_text()) or {}
        except (OSError, yaml.YAMLError):
            logger.debug("unreadable preferences at %s", path, exc_info=True)
            return prefs
        if not isinstance(data, dict):
            return prefs
        if isinstance(data.get("browser"), dict):
            _load_browser(prefs, data["browser"])
        if isinstance(data.get("display"), dict):
            ddata = data["display"]
            if ddata.get("theme"):
                prefs.display.theme = str(ddata["theme"])
            if "show_suggestions" in ddata:
                prefs.display.show_suggestions = bool(ddata["show_suggestions"])
    else:
        # Create default file for user to customize
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(_DEFAULT_YAML)
        except OSError:
            logger.debug("could not write default preferences", exc_info=True)

    return prefs


def _save_key(section: str, key: str, value: str, path: Path | None = None) -> None:
    """Surgically rewrite ``section.key``, preserving comments and other keys."""
    path = path or PREFS_PATH
    try:
        if path.exists():
            text = path.read_text()
        else:
            path.parent.mkdir(parents=True, exist_ok=True)
            text = _DEFAULT_YAML

        if re.search(rf"^[ \t]+{key}:", text, re.MULTILINE):
            # Replace the value, keep any trailing comment
            text = re.sub(
                rf'^([ \t]+{key}:)[ \t]*(?:"[^"]*"|[^\s#]+)?(.*?)$',
                lambda m: f"{m.group(1)} {value}{m.group(2)}",
                text,
                count=1,
                flags=re.MULTILINE,
            )
        elif re.search(rf"^{section}:", text, re.MULTILINE):
            text = re.sub(
                rf"^({section}:.*)$",
                lambda m: f"{m.group(1)}\n  {key}: {value}",
                text,
                count=1,
                flags=re.MULTILINE,
            )
        else:
            text = text.rstrip() + f"\n\n{section}:\n  {key}: {value}\n"

        path.write_text(text)
    except OSError:
        logger.debug("could not save %s.%s", section, key, exc_info=True)


def save_theme_name(name: str, path: Path | None = None) -> None:
    _save_key("display", "theme", f'"{name}"', path)


def save_show_suggestions(enabled: bool, path: Path | None = None) -> None:
    _save_key("display", "show_suggestions", "true" if enabled else "false", path)


def save_home_url(url: str, path: Path | None = None) -> None:
    _save_key("browser", "home_url", f'"{url}"', path)
