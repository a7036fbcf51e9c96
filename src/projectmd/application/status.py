"""
Status - Read-only report of a project document and its tracker.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from ..adapters.parsers import ProjectDocumentParser, TaskFileParser
from ..core.domain.entities import ProjectConfig, TaskFile, TaskItem
from ..core.exceptions import ProjectMdError
from ..core.ports.issue_tracker import IssueState, IssueTrackerPort


logger = logging.getLogger("Status")


@dataclass
class TaskStatusEntry:
    """A task item plus, in verbose mode, what its task file says."""

    item: TaskItem
    task_file: Optional[TaskFile] = None
    error: Optional[str] = None


@dataclass
class TrackerSummary:
    """Live issue counts fetched from the tracker."""

    total: int = 0
    open: int = 0
    closed: int = 0


@dataclass
class StatusReport:
    """Everything the status command shows."""

    project_path: Path
    config: ProjectConfig
    tasks: list[TaskStatusEntry] = field(default_factory=list)
    tracker: Optional[TrackerSummary] = None

    @property
    def new_count(self) -> int:
        return sum(1 for t in self.tasks if t.item.status.is_new)

    @property
    def existing_count(self) -> int:
        return len(self.tasks) - self.new_count


def build_status(
    project_path: Union[str, Path],
    tracker: Optional[IssueTrackerPort] = None,
    verbose: bool = False,
) -> StatusReport:
    """
    Build a status report for a project document.

    Args:
        project_path: Path to the project document
        tracker: If given, live issue counts are fetched with list_issues()
        verbose: Also read each task file for its title, type and tags

    Returns:
        StatusReport

    Raises:
        FileAccessError / ParseError: If the project document is unusable
        BackendError: If the tracker listing fails
    """
    project_path = Path(project_path)
    document = ProjectDocumentParser().parse_file(project_path)
    report = StatusReport(project_path=project_path, config=document.config)

    task_parser = TaskFileParser()
    for item in document.tasks:
        entry = TaskStatusEntry(item=item)
        if verbose:
            try:
                entry.task_file = task_parser.parse_file(item.resolve(project_path.parent))
            except ProjectMdError as e:
                logger.debug(f"Could not read {item.path}: {e}")
                entry.error = str(e)
        report.tasks.append(entry)

    if tracker is not None:
        issues = tracker.list_issues()
        report.tracker = TrackerSummary(
            total=len(issues),
            open=sum(1 for i in issues if i.state is IssueState.OPEN),
            closed=sum(1 for i in issues if i.state is IssueState.CLOSED),
        )

    return report
