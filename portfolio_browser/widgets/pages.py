"""Page renderers: turn a RenderableDescriptor into Textual widgets."""

from __future__ import annotations

from typing import Callable

from rich.markup import escape
from rich.text import Text
from textual.widget import Widget
from textual.widgets import Static

from ..core.constants import (
    ALL_PROJECTS_COMPONENT_ID,
    ERROR_COMPONENT_ID,
    HOME_COMPONENT_ID,
    HOME_URL,
    HTML_COMPONENT_ID,
    PROJECT_COMPONENT_ID,
    SEARCH_COMPONENT_ID,
)
from ..core.projects import Project
from ..core.registry import RenderableDescriptor
from ..core.search import highlight_search_terms


class PageLink(Static):
    """A clickable link that navigates the active tab to ``target``."""

    def __init__(self, label: str, target: str, **kwargs) -> None:
        super().__init__(Text(label), classes="page-link", **kwargs)
        self.target = target

    def on_click(self) -> None:
        self.app.navigate_active(self.target, raw=False)


class PageAction(Static):
    """A clickable action (retry, back) on the current tab."""

    def __init__(self, label: str, action: str, **kwargs) -> None:
        super().__init__(Text(label), classes="page-action", **kwargs)
        self.action = action

    async def on_click(self) -> None:
        await self.app.run_action(self.action)


class PageHeading(Static):
    def __init__(self, text: str, **kwargs) -> None:
        super().__init__(Text(text, style="bold"), classes="page-heading", **kwargs)


class PageText(Static):
    def __init__(self, content: str | Text, **kwargs) -> None:
        if isinstance(content, str):
            content = Text(content)
        super().__init__(content, classes="page-text", **kwargs)


def _project_card(project: Project) -> list[Widget]:
    meta = " · ".join(part for part in (project.category, project.status) if part)
    widgets: list[Widget] = [PageLink(f"◆ {project.name}", project.url)]
    widgets.append(PageText(project.description))
    if meta:
        widgets.append(PageText(Text(meta, style="dim")))
    return widgets


def render_home(props: dict) -> list[Widget]:
    widgets: list[Widget] = [
        PageHeading("Portfolio Browser"),
        PageText("Search projects or type an address above."),
    ]
    for link in props.get("quick_links", ()):
        widgets.append(PageLink(f"→ {link['title']}", link["url"]))
        widgets.append(PageText(Text(f"{link['description']}  [{link['category']}]", style="dim")))
    return widgets


def render_project(props: dict) -> list[Widget]:
    project = props.get("project")
    if not isinstance(project, Project):
        return [PageText("Project not available.")]
    widgets: list[Widget] = [
        PageHeading(project.name),
        PageText(project.description),
        PageText(Text(project.path, style="dim")),
        PageHeading("Technologies"),
        PageText(", ".join(props.get("technologies", ()))),
        PageHeading("Features"),
    ]
    widgets.extend(PageText(f"• {feature}") for feature in props.get("features", ()))
    for label, url in (("Demo", project.demo_url), ("Source", project.github_url)):
        if url:
            widgets.append(PageLink(f"{label}: {url}", url))
    widgets.append(PageAction("← Back", "go_back"))
    widgets.append(PageLink("All Projects", "projects:all"))
    return widgets


def render_all_projects(props: dict) -> list[Widget]:
    projects = props.get("projects", ())
    widgets: list[Widget] = [PageHeading(f"All Projects ({len(projects)})")]
    for project in projects:
        widgets.extend(_project_card(project))
    return widgets


def render_search(props: dict) -> list[Widget]:
    query = props.get("query", "")
    results = props.get("results", ())
    widgets: list[Widget] = [PageHeading(f'Results for "{query}"')]
    if not results:
        widgets.append(PageText(f'No projects match "{query}".'))
        widgets.append(PageLink("Browse all projects", "projects:all"))
        return widgets
    for project in results:
        widgets.append(PageLink(f"◆ {project.name}", project.url))
        widgets.append(
            PageText(Text.from_markup(highlight_search_terms(escape(project.description), query)))
        )
    return widgets


def render_html(props: dict) -> list[Widget]:
    url = props.get("url", "")
    if props.get("external"):
        return [
            PageHeading("External page"),
            PageText(url),
            PageText(Text("External pages are not fetched in the portfolio browser.", style="dim")),
        ]
    return [PageText(props.get("html", "") or "(empty document)")]


def render_error(props: dict) -> list[Widget]:
    widgets: list[Widget] = [
        PageHeading(f"{props.get('code', 'ERR')}  {props.get('heading', '')}"),
        PageText(props.get("message", "")),
    ]
    if props.get("details"):
        widgets.append(PageText(Text(props["details"], style="dim")))
    widgets.extend(PageText(f"• {tip}") for tip in props.get("suggestions", ()))
    if props.get("retry_url"):
        widgets.append(PageAction("⟳ Try again", "reload"))
    widgets.append(PageLink("⌂ Home", HOME_URL))
    return widgets


def render_generic(descriptor: RenderableDescriptor) -> list[Widget]:
    widgets: list[Widget] = [PageHeading(descriptor.title)]
    project = descriptor.props.get("project")
    if isinstance(project, Project):
        widgets.append(PageText(project.description))
    return widgets


RENDERERS: dict[str, Callable[[dict], list[Widget]]] = {
    HOME_COMPONENT_ID: render_home,
    PROJECT_COMPONENT_ID: render_project,
    ALL_PROJECTS_COMPONENT_ID: render_all_projects,
    SEARCH_COMPONENT_ID: render_search,
    HTML_COMPONENT_ID: render_html,
    ERROR_COMPONENT_ID: render_error,
}


def render_descriptor(descriptor: RenderableDescriptor) -> list[Widget]:
    """Widgets for a descriptor; unknown components get a generic page."""
    renderer = RENDERERS.get(descriptor.component_id)
    if renderer is None:
        return render_generic(descriptor)
    return renderer(dict(descriptor.props))
