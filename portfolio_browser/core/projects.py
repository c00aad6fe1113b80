"""Project directory: the portfolio projects the browser can display.

The built-in directory mirrors the portfolio's project show-cards.  A YAML
file can replace it::

    projects:
      - id: lab
        name: Lab
        description: Research and development platform
        path: /projects/lab
        technologies: [WebGL, Three.js]
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator

import yaml

from .errors import ProjectDirectoryError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Project:
    """A single portfolio project."""

    id: str
    name: str
    description: str
    path: str
    component_id: str | None = None  # renders through a dedicated component
    technologies: tuple[str, ...] = ()
    category: str = ""
    status: str = "active"  # active | development | completed
    demo_url: str = ""
    github_url: str = ""

    @property
    def url(self) -> str:
        return f"project:{self.id}"


class ProjectDirectory:
    """Read-only, ordered collection of projects keyed by id."""

    def __init__(self, projects: Iterable[Project] = ()) -> None:
        self._projects: dict[str, Project] = {}
        for project in projects:
            if project.id in self._projects:
                logger.debug("duplicate project id %r, keeping the first", project.id)
                continue
            self._projects[project.id] = project

    def all(self) -> list[Project]:
        return list(self._projects.values())

    def get(self, project_id: str) -> Project | None:
        return self._projects.get(project_id)

    def __contains__(self, project_id: object) -> bool:
        return project_id in self._projects

    def __iter__(self) -> Iterator[Project]:
        return iter(self._projects.values())

    def __len__(self) -> int:
        return len(self._projects)


DEFAULT_PROJECTS: tuple[Project, ...] = (
    Project(
        id="enchere",
        name="Système d'Enchères",
        description=(
            "A comprehensive online auction system with real-time bidding, "
            "user authentication, and payment processing."
        ),
        path="/projects/enchere",
        technologies=("React", "Node.js", "WebSocket", "PostgreSQL"),
        category="Web Application",
        status="completed",
    ),
    Project(
        id="gile",
        name="Gile - File Manager",
        description=(
            "Modern file management system with cloud integration, advanced "
            "search, and collaborative features."
        ),
        path="/projects/gile",
        technologies=("TypeScript", "Electron", "AWS S3", "Redis"),
        category="Desktop Application",
        status="active",
    ),
    Project(
        id="helixir",
        name="Helixir - Code Editor",
        description=(
            "Next-generation code editor with AI assistance, collaborative "
            "editing, and advanced debugging tools."
        ),
        path="/projects/helixir",
        technologies=("Monaco Editor", "WebAssembly", "AI/ML", "Docker"),
        category="Development Tool",
        status="development",
    ),
    Project(
        id="lab",
        name="Lab - Experimental Platform",
        description=(
            "Research and development platform for testing new technologies "
            "and innovative web solutions."
        ),
        path="/projects/lab",
        technologies=("WebGL", "Three.js", "WebRTC", "Machine Learning"),
        category="Research",
        status="active",
    ),
    Project(
        id="optimisationPostgres",
        name="Optimisation PostgreSQL",
        description=(
            "Database optimization tools and performance monitoring for "
            "PostgreSQL databases."
        ),
        path="/projects/optimisationPostgres",
        technologies=(
            "PostgreSQL",
            "Performance Monitoring",
            "SQL Optimization",
            "Analytics",
        ),
        category="Database Tool",
        status="completed",
    ),
    Project(
        id="satviewer",
        name="SatViewer - Satellite Tracking",
        description=(
            "Real-time satellite tracking and visualization system with "
            "orbital predictions."
        ),
        path="/projects/satviewer",
        technologies=("WebGL", "Satellite APIs", "Real-time Data", "Orbital Mechanics"),
        category="Visualization",
        status="active",
    ),
    Project(
        id="spotmap",
        name="SpotMap - Location Discovery",
        description=(
            "Interactive location discovery platform with user-generated "
            "content and social features."
        ),
        path="/projects/spotmap",
        technologies=("Maps API", "Geolocation", "Social Features", "Mobile-First"),
        category="Mobile Application",
        status="completed",
    ),
)


def default_directory() -> ProjectDirectory:
    return ProjectDirectory(DEFAULT_PROJECTS)


def _project_from_dict(data: dict, index: int) -> Project:
    missing = [key for key in ("id", "name") if not data.get(key)]
    if missing:
        raise ProjectDirectoryError(
            f"project #{index + 1} is missing {', '.join(missing)}"
        )
    technologies = data.get("technologies") or ()
    if isinstance(technologies, str):
        technologies = (technologies,)
    return Project(
        id=str(data["id"]),
        name=str(data["name"]),
        description=str(data.get("description") or ""),
        path=str(data.get("path") or f"/projects/{data['id']}"),
        component_id=data.get("component_id") or None,
        technologies=tuple(str(t) for t in technologies),
        category=str(data.get("category") or ""),
        status=str(data.get("status") or "active"),
        demo_url=str(data.get("demo_url") or ""),
        github_url=str(data.get("github_url") or ""),
    )


def load_project_directory(path: Path) -> ProjectDirectory:
    """Load a project directory from a YAML file.

    Raises ProjectDirectoryError if the file is unreadable or malformed.
    """
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ProjectDirectoryError(f"cannot read {path}: {exc}") from exc

    entries = data.get("projects") if isinstance(data, dict) else data
    if not isinstance(entries, list):
        raise ProjectDirectoryError(f"{path}: expected a list of projects")

    projects = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise ProjectDirectoryError(f"{path}: project #{index + 1} is not a mapping")
        projects.append(_project_from_dict(entry, index))
    logger.debug("loaded %d projects from %s", len(projects), path)
    return ProjectDirectory(projects)
