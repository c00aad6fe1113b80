"""Content registry: maps resolved navigation targets to renderable units.

Each registered component declares the properties it accepts together
with their defaults.  A lookup merges, in order, the declared defaults,
the properties computed for the target, and any caller overrides; keys a
component does not declare are dropped.

Default callbacks only log the intent, so a descriptor is usable even when
the host has not wired real handlers.
"""

from __future__ import annotations

import base64
import binascii
import logging
from dataclasses import dataclass, field
from typing import Any, Mapping
from urllib.parse import unquote

from .constants import (
    ALL_PROJECTS_COMPONENT_ID,
    ALL_PROJECTS_SUFFIX,
    ALL_PROJECTS_TITLE,
    CONTENT_HOME,
    CONTENT_HTML,
    CONTENT_PROJECT,
    CONTENT_SEARCH,
    DATA_PREFIX,
    ERROR_COMPONENT_ID,
    FALLBACK_TITLE,
    HOME_COMPONENT_ID,
    HOME_TITLE,
    HTML_COMPONENT_ID,
    PROJECT_COMPONENT_ID,
    SEARCH_COMPONENT_ID,
)
from .errors import ContentNotFound
from .projects import Project, ProjectDirectory
from .search import search_projects

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Default callbacks
# ---------------------------------------------------------------------------


def _log_navigate(url: str) -> None:
    logger.info("Navigate to: %s", url)


def _log_back() -> None:
    logger.info("Go back")


def _log_refresh() -> None:
    logger.info("Refresh page")


# ---------------------------------------------------------------------------
# Data
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ComponentInfo:
    """A renderable unit and the properties it accepts (with defaults)."""

    id: str
    title: str
    description: str = ""
    category: str = "Browser"
    status: str = "active"  # active | development | completed
    technologies: tuple[str, ...] = ()
    props: Mapping[str, Any] = field(default_factory=dict)

    def accepts(self, key: str) -> bool:
        return key in self.props


@dataclass(frozen=True, eq=False)
class RenderableDescriptor:
    """What the host needs to render a page: a component id plus its props."""

    component_id: str
    title: str
    props: Mapping[str, Any] = field(default_factory=dict)
    url: str = ""
    is_error: bool = False

    @property
    def error_type(self) -> str | None:
        if not self.is_error:
            return None
        return self.props.get("error_type")


@dataclass(frozen=True)
class ErrorConfig:
    code: str
    title: str
    description: str
    suggestions: tuple[str, ...]


ERROR_CONFIGS: dict[str, ErrorConfig] = {
    "404": ErrorConfig(
        "404",
        "Page Not Found",
        "The page you're looking for could not be found.",
        (
            "Check the URL for typos",
            "Navigate back to the home page",
            "Browse available projects",
        ),
    ),
    "500": ErrorConfig(
        "500",
        "Server Error",
        "Something went wrong on our end. Please try again later.",
        (
            "Refresh the page",
            "Try again in a few minutes",
            "Contact support if the problem persists",
        ),
    ),
    "network": ErrorConfig(
        "NET",
        "Network Error",
        "Unable to connect to the server. Check your internet connection.",
        (
            "Check your internet connection",
            "Try refreshing the page",
            "Disable any VPN or proxy",
        ),
    ),
    "timeout": ErrorConfig(
        "TIME",
        "Request Timeout",
        "The request took too long to complete.",
        ("Try refreshing the page", "Check your internet speed", "Try again later"),
    ),
    "permission": ErrorConfig(
        "403",
        "Access Denied",
        "You don't have permission to access this resource.",
        (
            "Check if you're logged in",
            "Contact an administrator",
            "Navigate to a public page",
        ),
    ),
    "generic": ErrorConfig(
        "ERR",
        "Something Went Wrong",
        "An unexpected error occurred.",
        ("Try refreshing the page", "Clear your browser cache", "Try again later"),
    ),
}

QUICK_LINKS: tuple[dict[str, str], ...] = (
    {
        "title": "All Projects",
        "description": "Browse all available projects",
        "url": "projects:all",
        "category": "Projects",
    },
    {
        "title": "Enchere Project",
        "description": "Auction system implementation",
        "url": "project:enchere",
        "category": "Projects",
    },
    {
        "title": "Gile Project",
        "description": "Project management system",
        "url": "project:gile",
        "category": "Projects",
    },
    {
        "title": "Helixir Project",
        "description": "Advanced web application",
        "url": "project:helixir",
        "category": "Projects",
    },
)

DEFAULT_TECHNOLOGIES: tuple[str, ...] = (
    "React",
    "TypeScript",
    "Next.js",
    "Tailwind CSS",
    "Node.js",
)

DEFAULT_FEATURES: tuple[str, ...] = (
    "Modern responsive design",
    "Type-safe development with TypeScript",
    "Server-side rendering with Next.js",
    "Component-based architecture",
    "Optimized performance",
)

_PAGE_TECH = ("React", "TypeScript", "Tailwind CSS", "shadcn/ui")

BUILTIN_COMPONENTS: tuple[ComponentInfo, ...] = (
    ComponentInfo(
        id=HOME_COMPONENT_ID,
        title="Browser Home Page",
        description="Modern browser home page with quick links and navigation.",
        technologies=_PAGE_TECH,
        props={"quick_links": QUICK_LINKS, "on_navigate": _log_navigate},
    ),
    ComponentInfo(
        id=PROJECT_COMPONENT_ID,
        title="Browser Project Page",
        description="Project detail page for browser display with rich content and navigation.",
        technologies=_PAGE_TECH,
        props={
            "project": None,
            "technologies": DEFAULT_TECHNOLOGIES,
            "features": DEFAULT_FEATURES,
            "on_navigate": _log_navigate,
            "on_back": _log_back,
        },
    ),
    ComponentInfo(
        id=ERROR_COMPONENT_ID,
        title="Browser Error Page",
        description="Error page for browser with customizable error types and recovery options.",
        technologies=_PAGE_TECH,
        props={
            "error_type": "404",
            "code": ERROR_CONFIGS["404"].code,
            "heading": ERROR_CONFIGS["404"].title,
            "message": "Page not found",
            "details": "The page you're looking for could not be found.",
            "suggestions": ERROR_CONFIGS["404"].suggestions,
            "retry_url": "",
            "on_navigate": _log_navigate,
            "on_refresh": _log_refresh,
            "on_back": _log_back,
        },
    ),
    ComponentInfo(
        id=SEARCH_COMPONENT_ID,
        title="Browser Search Results",
        description="Search results across the project directory.",
        props={"query": "", "results": (), "on_navigate": _log_navigate},
    ),
    ComponentInfo(
        id=HTML_COMPONENT_ID,
        title="Browser HTML Viewer",
        description="Viewer for external pages and inline data: documents.",
        props={"url": "", "html": "", "external": False},
    ),
    ComponentInfo(
        id=ALL_PROJECTS_COMPONENT_ID,
        title="All Projects Overview",
        description=(
            "Comprehensive portfolio overview showcasing all projects with "
            "detailed information and statistics."
        ),
        category="Portfolio",
        technologies=_PAGE_TECH,
        props={"projects": (), "on_navigate": _log_navigate},
    ),
)


def decode_data_url(url: str) -> str:
    """Payload of a ``data:`` URI as text ("" if there is none)."""
    if not url.startswith(DATA_PREFIX) or "," not in url:
        return ""
    header, _, payload = url.partition(",")
    if header.endswith(";base64"):
        try:
            return base64.b64decode(unquote(payload)).decode("utf-8", errors="replace")
        except (binascii.Error, ValueError):
            logger.debug("undecodable base64 data URI", exc_info=True)
            return ""
    return unquote(payload)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class ContentRegistry:
    """In-process registry of renderable components.

    Usage::

        registry = ContentRegistry(default_directory())
        descriptor = registry.lookup("project", "lab", url="project:lab")
    """

    def __init__(
        self,
        directory: ProjectDirectory,
        components: tuple[ComponentInfo, ...] = BUILTIN_COMPONENTS,
    ) -> None:
        self.directory = directory
        self._components: dict[str, ComponentInfo] = {}
        for info in components:
            self.register(info)

    # -- component catalogue ------------------------------------------------

    def register(self, info: ComponentInfo) -> None:
        self._components[info.id] = info

    def get(self, component_id: str) -> ComponentInfo | None:
        return self._components.get(component_id)

    def components(self) -> list[ComponentInfo]:
        return list(self._components.values())

    def by_category(self, category: str) -> list[ComponentInfo]:
        return [c for c in self._components.values() if c.category == category]

    def by_status(self, status: str) -> list[ComponentInfo]:
        return [c for c in self._components.values() if c.status == status]

    # -- descriptors --------------------------------------------------------

    def describe(
        self,
        component_id: str,
        *,
        title: str,
        url: str = "",
        computed: Mapping[str, Any] | None = None,
        overrides: Mapping[str, Any] | None = None,
        is_error: bool = False,
    ) -> RenderableDescriptor:
        """Build a descriptor for a registered component.

        Raises ContentNotFound if *component_id* is not registered.
        """
        info = self._components.get(component_id)
        if info is None:
            raise ContentNotFound("component", component_id)
        props = dict(info.props)
        for source in (computed or {}, overrides or {}):
            for key, value in source.items():
                if info.accepts(key):
                    props[key] = value
                else:
                    logger.debug("%s does not accept property %r", component_id, key)
        return RenderableDescriptor(
            component_id=component_id,
            title=title,
            props=props,
            url=url,
            is_error=is_error,
        )

    def lookup(
        self,
        content_type: str,
        extracted_id: str | None = None,
        *,
        listing: bool = False,
        url: str = "",
        overrides: Mapping[str, Any] | None = None,
    ) -> RenderableDescriptor:
        """Descriptor for a resolved target.

        *listing* marks a ``projects:<id>`` target; only ``projects:all``
        renders the all-projects overview.  Raises ContentNotFound when a
        project id is unknown.
        """
        if content_type == CONTENT_PROJECT:
            return self._lookup_project(extracted_id, listing, url, overrides)
        if content_type == CONTENT_SEARCH:
            query = extracted_id or ""
            results = tuple(search_projects(query, self.directory))
            return self.describe(
                SEARCH_COMPONENT_ID,
                title=f"Search: {query}",
                url=url,
                computed={"query": query, "results": results},
                overrides=overrides,
            )
        if content_type == CONTENT_HTML:
            is_data = url.startswith(DATA_PREFIX)
            return self.describe(
                HTML_COMPONENT_ID,
                title=FALLBACK_TITLE,
                url=url,
                computed={
                    "url": url,
                    "html": decode_data_url(url) if is_data else "",
                    "external": not is_data,
                },
                overrides=overrides,
            )
        if content_type == CONTENT_HOME:
            return self.describe(HOME_COMPONENT_ID, title=HOME_TITLE, url=url, overrides=overrides)
        raise ContentNotFound(content_type, extracted_id)

    def _lookup_project(
        self,
        project_id: str | None,
        listing: bool,
        url: str,
        overrides: Mapping[str, Any] | None,
    ) -> RenderableDescriptor:
        if listing and project_id == ALL_PROJECTS_SUFFIX:
            return self.describe(
                ALL_PROJECTS_COMPONENT_ID,
                title=ALL_PROJECTS_TITLE,
                url=url,
                computed={"projects": tuple(self.directory.all())},
                overrides=overrides,
            )

        project = self.directory.get(project_id) if project_id else None
        if project is None:
            raise ContentNotFound(CONTENT_PROJECT, project_id)

        component_id = PROJECT_COMPONENT_ID
        if project.component_id and project.component_id in self._components:
            component_id = project.component_id
        computed: dict[str, Any] = {"project": project}
        if project.technologies:
            computed["technologies"] = project.technologies
        return self.describe(
            component_id,
            title=project.name,
            url=url,
            computed=computed,
            overrides=overrides,
        )

    def error_descriptor(
        self,
        message: str = "Page not found",
        error_type: str = "404",
        *,
        url: str = "",
        details: str | None = None,
        overrides: Mapping[str, Any] | None = None,
    ) -> RenderableDescriptor:
        """Deterministic error page; ``retry_url`` re-requests *url*."""
        config = ERROR_CONFIGS.get(error_type, ERROR_CONFIGS["generic"])
        return self.describe(
            ERROR_COMPONENT_ID,
            title=config.title,
            url=url,
            computed={
                "error_type": error_type if error_type in ERROR_CONFIGS else "generic",
                "code": config.code,
                "heading": config.title,
                "message": message or config.description,
                "details": details if details is not None else config.description,
                "suggestions": config.suggestions,
                "retry_url": url,
            },
            overrides=overrides,
            is_error=True,
        )


def project_payload(descriptor: RenderableDescriptor) -> Project | None:
    """The project a descriptor renders, if any."""
    project = descriptor.props.get("project")
    return project if isinstance(project, Project) else None


