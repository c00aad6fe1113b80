"""Tests for portfolio_browser.core.projects -- the project directory."""

from __future__ import annotations

import pytest

from portfolio_browser.core.errors import BrowserError, ProjectDirectoryError
from portfolio_browser.core.projects import (
    Project,
    ProjectDirectory,
    default_directory,
    load_project_directory,
)


class TestProjectDirectory:
    def test_default_directory(self):
        d = default_directory()
        assert len(d) == 7
        assert "lab" in d
        assert d.get("helixir").name.startswith("Helixir")

    def test_order_is_preserved(self, directory):
        assert [p.id for p in directory] == ["lab", "spotmap", "helixir"]
        assert [p.id for p in directory.all()] == ["lab", "spotmap", "helixir"]

    def test_get_unknown(self, directory):
        assert directory.get("nope") is None
        assert "nope" not in directory

    def test_duplicates_keep_first(self):
        d = ProjectDirectory(
            [
                Project("a", "First", "", "/a"),
                Project("a", "Second", "", "/a"),
            ]
        )
        assert len(d) == 1
        assert d.get("a").name == "First"

    def test_project_url(self):
        assert Project("lab", "Lab", "", "/lab").url == "project:lab"


class TestLoadProjectDirectory:
    def test_mapping_form(self, tmp_path):
        path = tmp_path / "projects.yaml"
        path.write_text(
            "projects:\n"
            "  - id: lab\n"
            "    name: Lab\n"
            "    description: Research platform\n"
            "    technologies: [WebGL, Three.js]\n"
            "  - id: blog\n"
            "    name: Blog\n"
            "    technologies: Markdown\n"
        )
        d = load_project_directory(path)
        assert [p.id for p in d] == ["lab", "blog"]
        lab = d.get("lab")
        assert lab.technologies == ("WebGL", "Three.js")
        assert lab.path == "/projects/lab"
        assert lab.status == "active"
        assert d.get("blog").technologies == ("Markdown",)
        assert d.get("blog").description == ""

    def test_list_form(self, tmp_path):
        path = tmp_path / "projects.yaml"
        path.write_text("- id: x\n  name: X\n  component_id: x-view\n")
        d = load_project_directory(path)
        assert d.get("x").component_id == "x-view"

    def test_empty_file_is_rejected(self, tmp_path):
        path = tmp_path / "projects.yaml"
        path.write_text("")
        with pytest.raises(ProjectDirectoryError):
            load_project_directory(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ProjectDirectoryError):
            load_project_directory(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "projects.yaml"
        path.write_text("projects: [unclosed\n")
        with pytest.raises(ProjectDirectoryError):
            load_project_directory(path)

    def test_entry_not_a_mapping(self, tmp_path):
        path = tmp_path / "projects.yaml"
        path.write_text("projects:\n  - just a string\n")
        with pytest.raises(ProjectDirectoryError, match="not a mapping"):
            load_project_directory(path)

    def test_missing_name(self, tmp_path):
        path = tmp_path / "projects.yaml"
        path.write_text("projects:\n  - id: lab\n")
        with pytest.raises(ProjectDirectoryError, match="name"):
            load_project_directory(path)

    def test_error_is_a_browser_error(self, tmp_path):
        with pytest.raises(BrowserError):
            load_project_directory(tmp_path / "nope.yaml")
