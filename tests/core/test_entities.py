"""Tests for domain entities."""

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from projectmd.core.domain import (
    ProjectConfig,
    ProjectDocument,
    TaskFileConfig,
    TaskItem,
    TaskStatus,
)
from projectmd.core.domain.entities import format_timestamp, parse_timestamp


class TestTimestamps:
    """Tests for timestamp helpers."""

    def test_format_is_utc_with_z(self):
        moment = datetime(2025, 1, 15, 10, 30, 0, 123456, tzinfo=timezone.utc)
        assert format_timestamp(moment) == "2025-01-15T10:30:00Z"

    def test_format_converts_offsets(self):
        moment = datetime(2025, 1, 15, 12, 30, tzinfo=timezone(timedelta(hours=2)))
        assert format_timestamp(moment) == "2025-01-15T10:30:00Z"

    def test_format_treats_naive_as_utc(self):
        assert format_timestamp(datetime(2025, 1, 15, 10, 30)) == "2025-01-15T10:30:00Z"

    def test_parse_z_suffix(self):
        assert parse_timestamp("2025-01-20T15:45:32Z") == datetime(2025, 1, 20, 15, 45, 32, tzinfo=timezone.utc)

    def test_parse_offset(self):
        parsed = parse_timestamp("2025-01-20T17:45:32+02:00")
        assert parsed == datetime(2025, 1, 20, 15, 45, 32, tzinfo=timezone.utc)

    def test_parse_naive_is_utc(self):
        assert parse_timestamp("2025-01-20T15:45:32").tzinfo is not None

    def test_parse_garbage(self):
        assert parse_timestamp("last tuesday") is None

    def test_round_trip(self):
        text = "2030-06-01T00:00:01Z"
        assert format_timestamp(parse_timestamp(text)) == text


class TestTaskStatus:
    """Tests for TaskStatus."""

    def test_new(self):
        status = TaskStatus.new()
        assert status.is_new
        assert status.issue_number is None
        assert str(status) == "new"

    def test_existing(self):
        status = TaskStatus.existing(42)
        assert not status.is_new
        assert status.issue_number == 42
        assert str(status) == "#42"

    def test_equality(self):
        assert TaskStatus.existing(3) == TaskStatus.existing(3)
        assert TaskStatus.existing(3) != TaskStatus.existing(4)
        assert TaskStatus.new() == TaskStatus.new()
        assert TaskStatus.new() != TaskStatus.existing(1)
        assert len({TaskStatus.existing(3), TaskStatus.existing(3)}) == 1

    def test_repr(self):
        assert repr(TaskStatus.new()) == "TaskStatus.new()"
        assert repr(TaskStatus.existing(9)) == "TaskStatus.existing(9)"

    @pytest.mark.parametrize("number", [0, -1])
    def test_rejects_non_positive(self, number):
        with pytest.raises(ValueError):
            TaskStatus.existing(number)

    @pytest.mark.parametrize("number", ["7", 7.0, True])
    def test_rejects_non_integers(self, number):
        with pytest.raises(TypeError):
            TaskStatus.existing(number)


class TestTaskItem:
    """Tests for TaskItem."""

    def test_resolve_relative_to_root(self):
        item = TaskItem(TaskStatus.new(), "tasks/a.md", "A")
        assert item.resolve(Path("/work")) == Path("/work/tasks/a.md")


class TestProjectConfig:
    """Tests for ProjectConfig."""

    def test_from_dict_keeps_extra(self):
        config = ProjectConfig.from_dict({"backend": "github", "repo": "a/b", "team": "core"})
        assert config.backend == "github"
        assert config.repo == "a/b"
        assert config.extra == {"team": "core"}
        assert config.to_dict() == {"backend": "github", "repo": "a/b", "team": "core"}

    def test_missing_key(self):
        with pytest.raises(KeyError):
            ProjectConfig.from_dict({"backend": "github"})

    def test_non_string_value(self):
        with pytest.raises(TypeError):
            ProjectConfig.from_dict({"backend": "github", "repo": 12})


class TestTaskFileConfig:
    """Tests for TaskFileConfig."""

    def test_empty(self):
        config = TaskFileConfig.from_dict({})
        assert config.issue_id is None
        assert config.labels == []
        assert config.updated_at_time is None
        assert config.to_dict() == {}

    def test_full(self):
        config = TaskFileConfig.from_dict({
            "issue_id": 5,
            "type": "bug",
            "tags": ["api", "backend"],
            "created_at": "2025-01-15T10:30:00Z",
            "updated_at": "2025-01-20T15:45:32Z",
            "owner": "alice",
        })
        assert config.issue_id == 5
        assert config.type == "bug"
        assert config.labels == ["api", "backend"]
        assert config.extra == {"owner": "alice"}
        assert config.updated_at_time == datetime(2025, 1, 20, 15, 45, 32, tzinfo=timezone.utc)

    def test_to_dict_order(self):
        config = TaskFileConfig.from_dict({"owner": "alice", "tags": ["x"], "issue_id": 2})
        assert list(config.to_dict()) == ["issue_id", "tags", "owner"]

    def test_single_tag_string(self):
        assert TaskFileConfig.from_dict({"tags": "chore"}).labels == ["chore"]

    def test_labels_is_a_copy(self):
        config = TaskFileConfig.from_dict({"tags": ["a"]})
        config.labels.append("b")
        assert config.tags == ["a"]

    @pytest.mark.parametrize("data, error", [
        ({"issue_id": "7"}, TypeError),
        ({"issue_id": 0}, ValueError),
        ({"issue_id": True}, TypeError),
        ({"type": 3}, TypeError),
        ({"tags": [1, 2]}, TypeError),
        ({"tags": {"a": 1}}, TypeError),
    ])
    def test_invalid_values(self, data, error):
        with pytest.raises(error):
            TaskFileConfig.from_dict(data)

    def test_unparseable_updated_at(self):
        config = TaskFileConfig.from_dict({"updated_at": "yesterday"})
        assert config.updated_at == "yesterday"
        assert config.updated_at_time is None


class TestProjectDocument:
    """Tests for ProjectDocument."""

    def test_new_and_existing(self):
        document = ProjectDocument(
            config=ProjectConfig("github", "a/b"),
            tasks=[
                TaskItem(TaskStatus.new(), "a.md", "A"),
                TaskItem(TaskStatus.existing(2), "b.md", "B"),
                TaskItem(TaskStatus.new(), "c.md", "C"),
            ],
        )
        assert [t.path for t in document.new_tasks] == ["a.md", "c.md"]
        assert [t.path for t in document.existing_tasks] == ["b.md"]
