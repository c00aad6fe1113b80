"""UI-independent browser core: URL scheme, suggestions, registry, tabs."""

from .errors import BrowserError, ContentNotFound, ProjectDirectoryError, TabNotFound
from .projects import (
    DEFAULT_PROJECTS,
    Project,
    ProjectDirectory,
    default_directory,
    load_project_directory,
)
from .registry import ComponentInfo, ContentRegistry, RenderableDescriptor
from .scheme import ResolvedUrl, is_absolute_url, resolve
from .search import Suggestion, process_input, suggest
from .store import StoreSnapshot, TabSnapshot, TabStore
from .tab import ResolutionRequest, Tab

__all__ = [
    "BrowserError",
    "ComponentInfo",
    "ContentNotFound",
    "ContentRegistry",
    "DEFAULT_PROJECTS",
    "Project",
    "ProjectDirectory",
    "ProjectDirectoryError",
    "RenderableDescriptor",
    "ResolutionRequest",
    "ResolvedUrl",
    "StoreSnapshot",
    "Suggestion",
    "Tab",
    "TabNotFound",
    "TabSnapshot",
    "TabStore",
    "default_directory",
    "is_absolute_url",
    "load_project_directory",
    "process_input",
    "resolve",
    "suggest",
]
