"""Shared test fixtures for the portfolio-browser test suite."""

from __future__ import annotations

import pytest

from portfolio_browser.core.projects import Project, ProjectDirectory
from portfolio_browser.core.registry import ContentRegistry
from portfolio_browser.core.store import TabStore
from portfolio_browser.preferences import Preferences


# -- Project fixtures ----------------------------------------------------------

SAMPLE_PROJECTS = (
    Project("lab", "Lab", "Experimental platform", "/projects/lab"),
    Project(
        "spotmap",
        "SpotMap",
        "Location discovery",
        "/projects/spotmap",
        technologies=("Maps API", "Geolocation"),
    ),
    Project("helixir", "Helixir", "Code editor with AI assistance", "/projects/helixir"),
)


@pytest.fixture
def directory() -> ProjectDirectory:
    """A small, predictable project directory."""
    return ProjectDirectory(SAMPLE_PROJECTS)


@pytest.fixture
def registry(directory) -> ContentRegistry:
    return ContentRegistry(directory)


@pytest.fixture
def store(registry, directory) -> TabStore:
    """A store whose requests queue up until ``settle()`` is awaited."""
    return TabStore(registry, directory)


# -- Preferences --------------------------------------------------------------


@pytest.fixture
def prefs() -> Preferences:
    """Preferences with instant page loads, so UI tests don't wait."""
    p = Preferences()
    p.browser.loading_delay = 0.0
    return p


@pytest.fixture
def sample_projects() -> tuple[Project, ...]:
    return SAMPLE_PROJECTS
