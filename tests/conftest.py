"""Shared fixtures for projectmd tests."""

from datetime import datetime, timezone
from pathlib import Path
from textwrap import dedent

import pytest

from projectmd.core.exceptions import NotFoundError
from projectmd.core.ports.issue_tracker import Issue, IssueState, IssueTrackerPort


FIXTURES = Path(__file__).parent / "fixtures"

FIXED_NOW = datetime(2025, 1, 20, 15, 45, 32, tzinfo=timezone.utc)


class FakeTracker(IssueTrackerPort):
    """In-memory issue tracker that records every call."""

    def __init__(self, next_number: int = 1):
        self.next_number = next_number
        self.issues: dict[int, Issue] = {}
        self.labels: dict[int, list[str]] = {}
        self.calls: list[tuple] = []
        self.fail_on: dict[str, Exception] = {}  # title -> error

    def create_issue(self, title, body, labels):
        self.calls.append(("create", title, body, list(labels)))
        self._maybe_fail(title)
        number = self.next_number
        self.next_number += 1
        issue = Issue(id=1000 + number, number=number, title=title, body=body, state=IssueState.OPEN)
        self.issues[number] = issue
        self.labels[number] = list(labels)
        return issue

    def update_issue(self, number, title, body, labels):
        self.calls.append(("update", number, title, body, list(labels)))
        self._maybe_fail(title)
        if number not in self.issues:
            raise NotFoundError(f"Issue #{number} not found", issue_number=number)
        issue = Issue(id=1000 + number, number=number, title=title, body=body, state=self.issues[number].state)
        self.issues[number] = issue
        self.labels[number] = list(labels)
        return issue

    def get_issue(self, number):
        self.calls.append(("get", number))
        if number not in self.issues:
            raise NotFoundError(f"Issue #{number} not found", issue_number=number)
        return self.issues[number]

    def list_issues(self):
        self.calls.append(("list",))
        return list(self.issues.values())

    def seed(self, number, title="Existing", state=IssueState.OPEN):
        self.issues[number] = Issue(id=1000 + number, number=number, title=title, state=state)
        self.next_number = max(self.next_number, number + 1)

    def _maybe_fail(self, title):
        error = self.fail_on.get(title)
        if error is not None:
            raise error

    @property
    def mutating_calls(self):
        return [c for c in self.calls if c[0] in ("create", "update")]


@pytest.fixture
def tracker():
    return FakeTracker()


@pytest.fixture
def fixtures_dir():
    return FIXTURES


@pytest.fixture
def write_project(tmp_path):
    """Write a project tree: write_project(document, {relative_path: text})."""

    def _write(document: str, tasks: dict = None) -> Path:
        project = tmp_path / "project.md"
        project.write_text(dedent(document).lstrip("\n"), encoding="utf-8")
        for relative, text in (tasks or {}).items():
            path = tmp_path / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(dedent(text).lstrip("\n"), encoding="utf-8")
        return project

    return _write


@pytest.fixture
def clock():
    return lambda: FIXED_NOW
