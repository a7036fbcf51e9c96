"""
Sync Engine - Reconciles task files with the issue tracker.

This is the main entry point for sync operations.
"""

import logging
import os
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, Union

from ...adapters.parsers import ProjectDocumentParser, TaskFileParser
from ...core.domain.entities import (
    TaskFile,
    TaskFileConfig,
    TaskItem,
    format_timestamp,
    parse_timestamp,
)
from ...core.domain.events import (
    EventBus,
    IssueCreated,
    IssueUpdated,
    ProjectDocumentUpdated,
    SyncCompleted,
    SyncStarted,
    TaskFailed,
    TaskSkipped,
)
from ...core.exceptions import BackendError, FileAccessError, ProjectMdError
from ...core.ports.issue_tracker import Issue, IssueTrackerPort


class SyncAction(Enum):
    """What happened to a single task during a sync."""

    CREATED = "created"
    UPDATED = "updated"
    SKIPPED = "skipped"


@dataclass
class SyncResult:
    """Result of a sync operation, in task order within each list."""

    success: bool = True
    dry_run: bool = False
    document_updated: bool = False

    created: list[tuple[str, Optional[int]]] = field(default_factory=list)  # (path, issue)
    updated: list[tuple[str, int]] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    errors: list[tuple[str, str]] = field(default_factory=list)  # (path, message)

    def add_created(self, path: str, issue_number: Optional[int]) -> None:
        self.created.append((path, issue_number))

    def add_updated(self, path: str, issue_number: int) -> None:
        self.updated.append((path, issue_number))

    def add_skipped(self, path: str) -> None:
        self.skipped.append(path)

    def add_error(self, path: str, error: str) -> None:
        """Add an error message for a task."""
        self.errors.append((path, error))
        self.success = False

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    @property
    def total(self) -> int:
        return len(self.created) + len(self.updated) + len(self.skipped) + len(self.errors)


class SyncEngine:
    """
    Synchronizes the tasks of a project document with an issue tracker.

    For each task item, in document order:
    1. Read and parse the task file
    2. New tasks: create an issue and stamp issue_id/created_at/updated_at
    3. Existing tasks: align issue_id with the document, skip if unchanged
       since the last sync, otherwise update the issue and stamp updated_at
    Afterwards new issue numbers are written back into the project document.

    Failures of a single task are recorded and never stop the run.
    """

    def __init__(
        self,
        tracker: IssueTrackerPort,
        project_root: Optional[Union[str, Path]] = None,
        dry_run: bool = False,
        clock: Optional[Callable[[], datetime]] = None,
        event_bus: Optional[EventBus] = None,
        document_parser: Optional[ProjectDocumentParser] = None,
        task_parser: Optional[TaskFileParser] = None,
    ):
        """
        Initialize the engine.

        Args:
            tracker: Issue tracker port
            project_root: Directory task paths are relative to
                (defaults to the project document's directory)
            dry_run: If True, decide actions without calling the tracker
                or writing files
            clock: Source of the current time for timestamps
            event_bus: Optional event bus
            document_parser: Optional project document parser
            task_parser: Optional task file parser
        """
        self.tracker = tracker
        self.project_root = Path(project_root) if project_root is not None else None
        self.dry_run = dry_run
        self.clock = clock or (lambda: datetime.now(timezone.utc))
        self.event_bus = event_bus or EventBus()
        self.document_parser = document_parser or ProjectDocumentParser()
        self.task_parser = task_parser or TaskFileParser()
        self.logger = logging.getLogger("SyncEngine")

    # -------------------------------------------------------------------------
    # Main Entry Point
    # -------------------------------------------------------------------------

    def sync(self, project_path: Union[str, Path]) -> SyncResult:
        """
        Sync every task of a project document.

        Args:
            project_path: Path to the project document

        Returns:
            SyncResult with per-task outcomes

        Raises:
            FileAccessError: If the project document cannot be read, or
                cannot be rewritten after issues were created
            ParseError: If the project document is malformed
        """
        project_path = Path(project_path)
        project_root = self.project_root or project_path.parent

        content = self._read(project_path, "project file")
        document = self.document_parser.parse(content, source=str(project_path))

        result = SyncResult(dry_run=self.dry_run)
        self.logger.info(
            f"Syncing {len(document.tasks)} task(s) from {project_path} "
            f"to {document.config.backend}:{document.config.repo}"
        )
        self.event_bus.publish(SyncStarted(
            project_path=str(project_path),
            task_count=len(document.tasks),
            dry_run=self.dry_run,
        ))

        for item in document.tasks:
            try:
                action, issue_number = self._sync_task(item, project_root)
            except (ProjectMdError, OSError) as e:
                self.logger.error(f"Failed to sync {item.path}: {e}")
                result.add_error(item.path, str(e))
                self.event_bus.publish(TaskFailed(task_path=item.path, error=str(e)))
                continue

            if action is SyncAction.CREATED:
                result.add_created(item.path, issue_number)
            elif action is SyncAction.UPDATED:
                result.add_updated(item.path, issue_number)
            else:
                result.add_skipped(item.path)

        if result.created and not self.dry_run:
            result.document_updated = self._update_project_document(project_path, content, result)

        self.event_bus.publish(SyncCompleted(
            project_path=str(project_path),
            created=len(result.created),
            updated=len(result.updated),
            skipped=len(result.skipped),
            errors=[f"{path}: {error}" for path, error in result.errors],
        ))
        return result

    # -------------------------------------------------------------------------
    # Per-task Reconciliation
    # -------------------------------------------------------------------------

    def _sync_task(self, item: TaskItem, project_root: Path) -> tuple[SyncAction, Optional[int]]:
        """Reconcile one task item; raises on any task-level failure."""
        path = item.resolve(project_root)
        text = self._read(path, "task file")
        task = self.task_parser.parse(text, source=str(path))

        if item.status.is_new:
            return self._create(item, path, text, task)
        return self._update(item, path, text, task)

    def _create(
        self,
        item: TaskItem,
        path: Path,
        text: str,
        task: TaskFile,
    ) -> tuple[SyncAction, Optional[int]]:
        labels = task.config.labels

        if self.dry_run:
            self.logger.info(f"[DRY-RUN] Would create issue '{task.title}' from {item.path}")
            return SyncAction.CREATED, None

        issue = self._call_tracker(
            f"create issue for {item.path}",
            lambda: self.tracker.create_issue(task.title, task.body, labels),
        )
        now = format_timestamp(self.clock())

        def stamp(config: TaskFileConfig) -> None:
            config.issue_id = issue.number
            if config.created_at is None:
                config.created_at = now
            config.updated_at = now

        self._rewrite_task_file(path, text, stamp, stamped_at=now)
        self.logger.info(f"Created issue #{issue.number} for {item.path}")
        self.event_bus.publish(IssueCreated(
            task_path=item.path, issue_number=issue.number, title=task.title
        ))
        return SyncAction.CREATED, issue.number

    def _update(
        self,
        item: TaskItem,
        path: Path,
        text: str,
        task: TaskFile,
    ) -> tuple[SyncAction, Optional[int]]:
        number = item.status.issue_number
        labels = task.config.labels
        id_mismatch = task.config.issue_id != number

        if id_mismatch:
            # The document is the source of truth for identity
            self.logger.info(
                f"Aligning issue_id of {item.path}: {task.config.issue_id} -> {number}"
            )
            if not self.dry_run:
                text = self._rewrite_task_file(
                    path, text, lambda config: setattr(config, "issue_id", number)
                )

        # In dry-run the id rewrite did not touch the file, but it would have
        if not (self.dry_run and id_mismatch) and self._is_unchanged(path, task.config):
            self.logger.debug(f"Skipping {item.path}: unchanged since {task.config.updated_at}")
            self.event_bus.publish(TaskSkipped(task_path=item.path, issue_number=number))
            return SyncAction.SKIPPED, number

        if self.dry_run:
            self.logger.info(f"[DRY-RUN] Would update issue #{number} from {item.path}")
            return SyncAction.UPDATED, number

        issue = self._call_tracker(
            f"update issue #{number} for {item.path}",
            lambda: self.tracker.update_issue(number, task.title, task.body, labels),
        )
        now = format_timestamp(self.clock())
        self._rewrite_task_file(
            path, text, lambda config: setattr(config, "updated_at", now), stamped_at=now
        )
        self.logger.info(f"Updated issue #{number} from {item.path}")
        self.event_bus.publish(IssueUpdated(
            task_path=item.path, issue_number=number, title=task.title
        ))
        return SyncAction.UPDATED, issue.number

    def _is_unchanged(self, path: Path, config: TaskFileConfig) -> bool:
        """
        Change-detection gate.

        A task is unchanged when its stored updated_at is not earlier than
        the file's modification time. After a stamp the modification time is
        set to exactly the stamped second, so any later write, even within
        that second, counts as a change.
        """
        stamped = config.updated_at_time
        if stamped is None:
            return False

        modified = datetime.fromtimestamp(path.stat().st_mtime, tz=timezone.utc)
        return stamped >= modified

    # -------------------------------------------------------------------------
    # File Rewrites
    # -------------------------------------------------------------------------

    def _rewrite_task_file(
        self,
        path: Path,
        text: str,
        mutate: Callable[[TaskFileConfig], None],
        stamped_at: Optional[str] = None,
    ) -> str:
        """
        Rewrite a task file's front matter and return the new contents.

        When stamped_at is given the file's modification time is set to it,
        so the next run sees the file as unchanged until it is edited.
        """
        new_text = self.task_parser.rewrite(text, mutate, source=str(path))
        self._write(path, new_text, "task file")

        if stamped_at is not None:
            moment = parse_timestamp(stamped_at)
            if moment is not None:
                os.utime(path, (moment.timestamp(), moment.timestamp()))
        return new_text

    def _update_project_document(
        self,
        project_path: Path,
        content: str,
        result: SyncResult,
    ) -> bool:
        """
        Replace '* [new] - <path> -' with '* [#N] - <path> -' for created tasks.

        This is an exact substring substitution: everything else in the
        document is preserved as it was read. A created task whose bullet
        cannot be found is recorded as an error, since the next sync would
        create its issue again.
        """
        updated = content
        replacements = 0

        for task_path, issue_number in result.created:
            pattern = f"* [new] - {task_path} -"
            count = updated.count(pattern)
            if count == 0:
                error = f"Created issue #{issue_number} but found no '{pattern}' bullet in {project_path}"
                self.logger.error(error)
                result.add_error(task_path, error)
                continue
            replacements += count
            updated = updated.replace(pattern, f"* [#{issue_number}] - {task_path} -")

        if updated == content:
            return False

        self._write(project_path, updated, "project file")
        self.logger.info(f"Wrote {replacements} new issue number(s) to {project_path}")
        self.event_bus.publish(ProjectDocumentUpdated(
            project_path=str(project_path), replacements=replacements
        ))
        return True

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _call_tracker(self, description: str, call: Callable[[], Issue]) -> Issue:
        """Run a tracker call, normalizing any failure to BackendError."""
        try:
            return call()
        except BackendError:
            raise
        except Exception as e:
            raise BackendError(f"Failed to {description}: {e}", cause=e) from e

    @staticmethod
    def _read(path: Path, kind: str) -> str:
        # newline="" keeps line endings as they are on disk; a leading BOM is dropped
        try:
            with path.open("r", encoding="utf-8-sig", newline="") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise FileAccessError(f"Failed to read {kind} {path}: {e}", path=path, cause=e) from e

    @staticmethod
    def _write(path: Path, content: str, kind: str) -> None:
        try:
            with path.open("w", encoding="utf-8", newline="") as f:
                f.write(content)
        except OSError as e:
            raise FileAccessError(f"Failed to write {kind} {path}: {e}", path=path, cause=e) from e
