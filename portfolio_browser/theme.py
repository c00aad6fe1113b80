"""Theme definitions for the portfolio browser.

Each preset is a Textual Theme controlling the base UI colors ($background,
$surface, $panel, $primary, ...) used by styles.tcss.
"""

from textual.theme import Theme

TEXTUAL_THEMES: dict[str, Theme] = {
    "dark": Theme(
        name="browser-dark",
        primary="#4f8cff",
        secondary="#8ab4f8",
        accent="#3c4043",
        background="#202124",
        surface="#292a2d",
        panel="#35363a",
        success="#81c995",
        warning="#fdd663",
        error="#f28b82",
        dark=True,
    ),
    "light": Theme(
        name="browser-light",
        primary="#1a73e8",
        secondary="#4285f4",
        accent="#dadce0",
        background="#ffffff",
        surface="#f1f3f4",
        panel="#dee1e6",
        success="#188038",
        warning="#b06000",
        error="#d93025",
        dark=False,
    ),
    "solarized": Theme(
        name="browser-solarized",
        primary="#b58900",
        secondary="#268bd2",
        accent="#6c71c4",
        background="#002b36",
        surface="#073642",
        panel="#586e75",
        success="#859900",
        warning="#cb4b16",
        error="#dc322f",
        dark=True,
    ),
}

DEFAULT_THEME = TEXTUAL_THEMES["dark"]


def textual_theme(name: str) -> Theme:
    """Theme for a preference name; unknown names fall back to dark."""
    return TEXTUAL_THEMES.get(name, DEFAULT_THEME)
