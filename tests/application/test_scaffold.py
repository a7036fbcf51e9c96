"""Tests for project initialization."""

import pytest

from projectmd.adapters.parsers import ProjectDocumentParser, TaskFileParser
from projectmd.application.scaffold import init_project
from projectmd.core.exceptions import ConfigError, ProjectMdError


class TestInitProject:
    """Tests for init_project."""

    def test_creates_files(self, tmp_path):
        created = init_project(tmp_path, "github", "octo/repo")

        assert created == [tmp_path / "project.md", tmp_path / "tasks" / "example.md"]

        document = ProjectDocumentParser().parse_file(tmp_path / "project.md")
        assert document.config.backend == "github"
        assert document.config.repo == "octo/repo"
        assert [(str(t.status), t.path) for t in document.tasks] == [("new", "tasks/example.md")]

        task = TaskFileParser().parse_file(tmp_path / "tasks" / "example.md")
        assert task.title == "Example task"
        assert task.config.tags == ["example"]

    def test_refuses_to_overwrite(self, tmp_path):
        (tmp_path / "project.md").write_text("keep me")

        with pytest.raises(ProjectMdError, match="already exists"):
            init_project(tmp_path, "github", "octo/repo")
        assert (tmp_path / "project.md").read_text() == "keep me"

    def test_keeps_existing_example_task(self, tmp_path):
        (tmp_path / "tasks").mkdir()
        (tmp_path / "tasks" / "example.md").write_text("mine")

        created = init_project(tmp_path, "github", "octo/repo")

        assert created == [tmp_path / "project.md"]
        assert (tmp_path / "tasks" / "example.md").read_text() == "mine"

    @pytest.mark.parametrize("backend, repo", [("gitlab", "octo/repo"), ("github", "octo")])
    def test_invalid_config(self, tmp_path, backend, repo):
        with pytest.raises(ConfigError):
            init_project(tmp_path, backend, repo)
        assert not (tmp_path / "project.md").exists()
