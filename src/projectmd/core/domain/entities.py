"""
Domain Entities - The project document, its task items and task files.

All entities are transient views built fresh from file contents on each
parse; the file system stays the single source of truth.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional


def format_timestamp(moment: datetime) -> str:
    """Format a datetime as an RFC-3339 UTC string with second precision."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def parse_timestamp(value: str) -> Optional[datetime]:
    """
    Parse an RFC-3339 style timestamp into an aware datetime.

    Naive values are taken as UTC. Returns None when the text is not a
    timestamp at all.
    """
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        moment = datetime.fromisoformat(text)
    except ValueError:
        return None
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment


@dataclass
class ProjectConfig:
    """Front matter of the project document."""

    backend: str
    repo: str
    extra: dict[str, Any] = field(default_factory=dict)

    KNOWN_KEYS = ("backend", "repo")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ProjectConfig":
        """Build from a front-matter mapping; raises KeyError/TypeError on bad shape."""
        backend = data["backend"]
        repo = data["repo"]
        if not isinstance(backend, str):
            raise TypeError("'backend' must be a string")
        if not isinstance(repo, str):
            raise TypeError("'repo' must be a string")

        extra = {k: v for k, v in data.items() if k not in cls.KNOWN_KEYS}
        return cls(backend=backend, repo=repo, extra=extra)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"backend": self.backend, "repo": self.repo}
        data.update(self.extra)
        return data


class TaskStatus:
    """
    Tracker status of a task item: either new, or an existing issue.

    Use TaskStatus.new() and TaskStatus.existing(number). Existing issue
    numbers are always >= 1.
    """

    __slots__ = ("_issue_number",)

    def __init__(self, issue_number: Optional[int] = None):
        if issue_number is not None:
            if isinstance(issue_number, bool) or not isinstance(issue_number, int):
                raise TypeError("issue number must be an integer")
            if issue_number < 1:
                raise ValueError(f"issue number must be >= 1, got {issue_number}")
        self._issue_number = issue_number

    @classmethod
    def new(cls) -> "TaskStatus":
        return cls(None)

    @classmethod
    def existing(cls, issue_number: int) -> "TaskStatus":
        return cls(issue_number)

    @property
    def is_new(self) -> bool:
        return self._issue_number is None

    @property
    def issue_number(self) -> Optional[int]:
        return self._issue_number

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TaskStatus):
            return NotImplemented
        return self._issue_number == other._issue_number

    def __hash__(self) -> int:
        return hash(self._issue_number)

    def __str__(self) -> str:
        return "new" if self.is_new else f"#{self._issue_number}"

    def __repr__(self) -> str:
        if self.is_new:
            return "TaskStatus.new()"
        return f"TaskStatus.existing({self._issue_number})"


@dataclass
class TaskItem:
    """One task bullet in the project document."""

    status: TaskStatus
    path: str  # exactly as written in the document
    description: str
    line: Optional[int] = None

    def resolve(self, project_root: Path) -> Path:
        """Location of the task file relative to the project root."""
        return project_root / self.path


@dataclass
class TaskFileConfig:
    """Front matter of a task file."""

    issue_id: Optional[int] = None
    type: Optional[str] = None
    tags: Optional[list[str]] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    extra: dict[str, Any] = field(default_factory=dict)

    KNOWN_KEYS = ("issue_id", "type", "tags", "created_at", "updated_at")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TaskFileConfig":
        """Build from a front-matter mapping; raises TypeError/ValueError on bad values."""
        issue_id = data.get("issue_id")
        if issue_id is not None:
            if isinstance(issue_id, bool) or not isinstance(issue_id, int):
                raise TypeError(f"'issue_id' must be an integer, got {issue_id!r}")
            if issue_id < 1:
                raise ValueError(f"'issue_id' must be >= 1, got {issue_id}")

        task_type = data.get("type")
        if task_type is not None and not isinstance(task_type, str):
            raise TypeError(f"'type' must be a string, got {task_type!r}")

        tags = data.get("tags")
        if isinstance(tags, str):
            tags = [tags]
        if tags is not None:
            if not isinstance(tags, list) or not all(isinstance(t, str) for t in tags):
                raise TypeError(f"'tags' must be a list of strings, got {tags!r}")

        timestamps = {}
        for key in ("created_at", "updated_at"):
            value = data.get(key)
            if value is not None and not isinstance(value, str):
                value = str(value)
            timestamps[key] = value

        return cls(
            issue_id=issue_id,
            type=task_type,
            tags=tags,
            created_at=timestamps["created_at"],
            updated_at=timestamps["updated_at"],
            extra={k: v for k, v in data.items() if k not in cls.KNOWN_KEYS},
        )

    def to_dict(self) -> dict[str, Any]:
        """Known keys that are set, followed by the passthrough keys."""
        data: dict[str, Any] = {}
        if self.issue_id is not None:
            data["issue_id"] = self.issue_id
        if self.type is not None:
            data["type"] = self.type
        if self.tags is not None:
            data["tags"] = list(self.tags)
        if self.created_at is not None:
            data["created_at"] = self.created_at
        if self.updated_at is not None:
            data["updated_at"] = self.updated_at
        data.update(self.extra)
        return data

    @property
    def labels(self) -> list[str]:
        return list(self.tags or [])

    @property
    def updated_at_time(self) -> Optional[datetime]:
        if self.updated_at is None:
            return None
        return parse_timestamp(self.updated_at)


@dataclass
class TaskFile:
    """A parsed task file: metadata, title and markdown body."""

    config: TaskFileConfig
    title: str
    body: str


@dataclass
class ProjectDocument:
    """A parsed project document."""

    config: ProjectConfig
    tasks: list[TaskItem] = field(default_factory=list)

    @property
    def new_tasks(self) -> list[TaskItem]:
        return [t for t in self.tasks if t.status.is_new]

    @property
    def existing_tasks(self) -> list[TaskItem]:
        return [t for t in self.tasks if not t.status.is_new]
