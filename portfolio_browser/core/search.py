"""Address-bar search: suggestions, free-text input processing, highlighting.

Suggestions follow a fixed precedence -- matching projects, then the
special pages, then a literal search -- and are never re-ranked.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable
from urllib.parse import quote, unquote

from .constants import (
    ALL_PROJECTS_TITLE,
    ALL_PROJECTS_URL,
    HOME_TITLE,
    HOME_URL,
    MAX_SUGGESTIONS,
    PROJECT_PREFIX,
    PROJECTS_PREFIX,
    SEARCH_PREFIX,
)
from .projects import Project
from .scheme import is_absolute_url


@dataclass(frozen=True)
class Suggestion:
    """A single entry in the address-bar dropdown."""

    id: str
    text: str
    type: str  # search | url | project | history
    url: str | None = None


def encode_query(query: str) -> str:
    """Percent-encode a query the way ``encodeURIComponent`` does."""
    return quote(query, safe="-_.!~*'()")


def search_url(query: str) -> str:
    return f"{SEARCH_PREFIX}{encode_query(query)}"


def _matches(project: Project, lower_query: str) -> bool:
    return (
        lower_query in project.name.lower()
        or lower_query in project.description.lower()
    )


def search_projects(query: str, projects: Iterable[Project]) -> list[Project]:
    """All projects whose name or description contains *query* (any case)."""
    if not query.strip():
        return []
    q = query.lower()
    return [p for p in projects if _matches(p, q)]


def suggest(query: str, projects: Iterable[Project]) -> list[Suggestion]:
    """Suggestions for the current address-bar text, at most MAX_SUGGESTIONS.

    A literal-search entry is always appended for a non-blank query, so the
    list is never empty unless the query is blank.  With eight or more
    matching projects the truncation cuts it off.
    """
    if not query.strip():
        return []

    q = query.lower()
    suggestions = [
        Suggestion(
            id=f"project-{project.id}",
            text=project.name,
            type="project",
            url=f"{PROJECT_PREFIX}{project.id}",
        )
        for project in projects
        if _matches(project, q)
    ]

    if q in "home":
        suggestions.append(Suggestion(id="home", text=HOME_TITLE, type="url", url=HOME_URL))

    if q in "all projects" or q in "projects":
        suggestions.append(
            Suggestion(
                id="all-projects",
                text=ALL_PROJECTS_TITLE,
                type="url",
                url=ALL_PROJECTS_URL,
            )
        )

    suggestions.append(
        Suggestion(
            id=f"search-{query}",
            text=f'Search for "{query}"',
            type="search",
            url=search_url(query),
        )
    )
    return suggestions[:MAX_SUGGESTIONS]


def process_input(text: str) -> str:
    """Turn free text typed into the address bar into a navigation target."""
    trimmed = text.strip()
    if not trimmed:
        return HOME_URL

    if is_absolute_url(trimmed):
        return trimmed

    # Protocol-less host name ("example.com")
    if "." in trimmed and " " not in trimmed:
        return f"https://{trimmed}"

    if trimmed == HOME_URL:
        return HOME_URL
    if trimmed in ("projects", "all projects"):
        return ALL_PROJECTS_URL

    if trimmed.startswith(PROJECT_PREFIX) or trimmed.startswith(PROJECTS_PREFIX):
        return trimmed

    return search_url(trimmed)


def extract_search_query(url: str) -> str:
    """Decoded query of a ``search:`` target, or "" for anything else."""
    if not url.startswith(SEARCH_PREFIX):
        return ""
    return unquote(url[len(SEARCH_PREFIX) :])


def highlight_search_terms(
    text: str, query: str, *, open_tag: str = "[reverse]", close_tag: str = "[/reverse]"
) -> str:
    """Wrap every case-insensitive occurrence of *query* in *text*.

    Defaults to Rich markup; callers rendering markup must escape *text*
    themselves before passing it in.
    """
    if not query.strip():
        return text
    pattern = re.compile(f"({re.escape(query)})", re.IGNORECASE)
    return pattern.sub(lambda m: f"{open_tag}{m.group(1)}{close_tag}", text)
