"""Pseudo-URL grammar for the browser address bar.

Targets are classified in a fixed priority order::

    ""  / "home"        -> home page
    "project:<id>"      -> a single project page
    "projects:<id>"     -> project list view ("projects:all" is the listing)
    "search:<query>"    -> search results (query is percent-encoded)
    "<scheme>:..."      -> external page, including ``data:`` URIs
    anything else       -> home page titled "Browser"

The last rule is a catch-all, so resolution never fails.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from urllib.parse import unquote

from .constants import (
    ALL_PROJECTS_SUFFIX,
    ALL_PROJECTS_TITLE,
    CONTENT_HOME,
    CONTENT_HTML,
    CONTENT_PROJECT,
    CONTENT_SEARCH,
    DATA_PREFIX,
    FALLBACK_TITLE,
    HOME_TITLE,
    HOME_URL,
    PROJECT_PREFIX,
    PROJECTS_PREFIX,
    SEARCH_PREFIX,
)

# RFC 3986 scheme, then a remainder that does not start with whitespace
_ABSOLUTE_URL_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*:\S.*$", re.DOTALL)


@dataclass(frozen=True)
class ResolvedUrl:
    """The typed intent behind a navigation target."""

    raw: str
    content_type: str
    title: str
    extracted_id: str | None = None
    is_listing: bool = False


def is_absolute_url(text: str) -> bool:
    """True if *text* carries a URL scheme (``https://...``, ``data:...``)."""
    return bool(_ABSOLUTE_URL_RE.match(text))


def resolve(raw: str) -> ResolvedUrl:
    """Classify a navigation target string."""
    if raw == "" or raw == HOME_URL:
        return ResolvedUrl(raw, CONTENT_HOME, HOME_TITLE)

    # Exact prefixes up to and including the colon.  "projects:x" does not
    # start with "project:" because the colon position differs.
    if raw.startswith(PROJECT_PREFIX):
        project_id = raw[len(PROJECT_PREFIX) :]
        return ResolvedUrl(
            raw, CONTENT_PROJECT, f"Project: {project_id}", extracted_id=project_id
        )

    if raw.startswith(PROJECTS_PREFIX):
        suffix = raw[len(PROJECTS_PREFIX) :]
        title = ALL_PROJECTS_TITLE if suffix == ALL_PROJECTS_SUFFIX else f"Projects: {suffix}"
        return ResolvedUrl(
            raw, CONTENT_PROJECT, title, extracted_id=suffix, is_listing=True
        )

    if raw.startswith(SEARCH_PREFIX):
        query = unquote(raw[len(SEARCH_PREFIX) :])
        return ResolvedUrl(raw, CONTENT_SEARCH, f"Search: {query}", extracted_id=query)

    if raw.startswith(DATA_PREFIX) or is_absolute_url(raw):
        return ResolvedUrl(raw, CONTENT_HTML, FALLBACK_TITLE)

    return ResolvedUrl(raw, CONTENT_HOME, FALLBACK_TITLE)


def page_title(raw: str) -> str:
    """Display title for a navigation target."""
    return resolve(raw).title


def content_type(raw: str) -> str:
    """Content type for a navigation target."""
    return resolve(raw).content_type
