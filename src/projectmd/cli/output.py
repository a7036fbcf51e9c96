"""
Output - Console output formatting.

Provides pretty-printed output with colors and formatting.
"""

import sys
from pathlib import Path
from typing import Optional

from ..application.status import StatusReport
from ..application.sync import SyncResult


class Colors:
    """ANSI color codes."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    CYAN = "\033[36m"

    BG_YELLOW = "\033[43m"


class Symbols:
    """Unicode symbols for output."""

    CHECK = "✓"
    CROSS = "✗"
    ARROW = "→"
    DOT = "•"
    WARN = "⚠"
    INFO = "ℹ"
    GEAR = "⚙"

    BOX_H = "─"


class Console:
    """Console output helper with colors and formatting."""

    def __init__(self, color: bool = True, verbose: bool = False):
        self.color = color and sys.stdout.isatty()
        self.verbose = verbose

    def _c(self, text: str, *codes: str) -> str:
        """Apply color codes to text."""
        if not self.color:
            return text
        return "".join(codes) + text + Colors.RESET

    def print(self, text: str = "") -> None:
        """Print text."""
        print(text)

    def header(self, text: str) -> None:
        """Print a header."""
        width = max(len(text) + 4, 50)
        border = Colors.CYAN + Symbols.BOX_H * width + Colors.RESET if self.color else "-" * width

        self.print()
        self.print(border)
        self.print(self._c(f"  {text}", Colors.BOLD, Colors.CYAN))
        self.print(border)
        self.print()

    def section(self, text: str) -> None:
        """Print a section header."""
        self.print()
        self.print(self._c(f"{Symbols.ARROW} {text}", Colors.BOLD, Colors.BLUE))

    def success(self, text: str) -> None:
        """Print success message."""
        self.print(self._c(f"  {Symbols.CHECK} {text}", Colors.GREEN))

    def error(self, text: str) -> None:
        """Print error message."""
        self.print(self._c(f"  {Symbols.CROSS} {text}", Colors.RED))

    def warning(self, text: str) -> None:
        """Print warning message."""
        self.print(self._c(f"  {Symbols.WARN} {text}", Colors.YELLOW))

    def info(self, text: str) -> None:
        """Print info message."""
        self.print(self._c(f"  {Symbols.INFO} {text}", Colors.CYAN))

    def detail(self, text: str) -> None:
        """Print detail text (dimmed)."""
        self.print(self._c(f"    {text}", Colors.DIM))

    def item(self, text: str, status: Optional[str] = None) -> None:
        """Print a list item."""
        status_str = ""
        if status == "ok":
            status_str = self._c(f" [{Symbols.CHECK}]", Colors.GREEN)
        elif status == "skip":
            status_str = self._c(" [SKIP]", Colors.YELLOW)
        elif status == "fail":
            status_str = self._c(f" [{Symbols.CROSS}]", Colors.RED)
        elif status:
            status_str = self._c(f" [{status}]", Colors.DIM)

        self.print(f"    {Symbols.DOT} {text}{status_str}")

    def dry_run_banner(self) -> None:
        """Print dry-run mode banner."""
        self.print()
        banner = f"  {Symbols.GEAR} DRY-RUN MODE - No changes will be made"
        if self.color:
            self.print(f"{Colors.BG_YELLOW}{Colors.BOLD}{banner}{Colors.RESET}")
        else:
            self.print(f"*** {banner} ***")
        self.print()

    # -------------------------------------------------------------------------
    # Reports
    # -------------------------------------------------------------------------

    def sync_result(self, result: SyncResult) -> None:
        """Print sync result summary; errors never hide the successes."""
        self.section("Sync Summary")
        self.print()

        if result.dry_run:
            self.info("Mode: DRY-RUN (no changes made)")

        if result.created:
            self.print()
            self.print(self._c(f"  Created ({len(result.created)}):", Colors.BOLD))
            for path, number in result.created:
                target = f"Issue #{number}" if number is not None else "new issue"
                self.item(f"{path} {Symbols.ARROW} {target}", "ok")

        if result.updated:
            self.print()
            self.print(self._c(f"  Updated ({len(result.updated)}):", Colors.BOLD))
            for path, number in result.updated:
                self.item(f"{path} {Symbols.ARROW} Issue #{number}", "ok")

        if result.skipped:
            self.print()
            self.print(self._c(f"  Skipped ({len(result.skipped)}):", Colors.BOLD))
            for path in result.skipped:
                self.item(path, "skip")

        if result.errors:
            self.print()
            self.print(self._c(f"  Errors ({len(result.errors)}):", Colors.BOLD))
            for path, error in result.errors:
                self.item(f"{path}: {error}", "fail")

        self.print()
        self.print(f"  Total: {result.total} tasks processed")
        self.print()
        if result.success:
            self.success("Sync completed successfully!")
        else:
            self.error("Sync completed with errors")

    def status_report(self, report: StatusReport, verbose: bool = False) -> None:
        """Print a project status report."""
        self.section(f"Project: {report.project_path}")
        self.detail(f"Backend: {report.config.backend}")
        self.detail(f"Repo: {report.config.repo}")

        self.print()
        self.print(self._c(f"  Tasks ({len(report.tasks)}):", Colors.BOLD))
        for entry in report.tasks:
            item = entry.item
            label = "NEW" if item.status.is_new else str(item.status)
            self.item(f"[{label}] {item.path} - {item.description}")

            if not verbose:
                continue
            if entry.error:
                self.detail(f"Error: {entry.error}")
            elif entry.task_file is not None:
                task = entry.task_file
                self.detail(f"Title: {task.title}")
                if task.config.type:
                    self.detail(f"Type: {task.config.type}")
                if task.config.tags:
                    self.detail(f"Tags: {', '.join(task.config.tags)}")

        if report.tracker is not None:
            self.print()
            self.info(f"Total issues in repository: {report.tracker.total}")
            self.detail(f"Open: {report.tracker.open}")
            self.detail(f"Closed: {report.tracker.closed}")

    def init_result(self, created: list[Path], backend: str, repo: str) -> None:
        """Print what init created and what to do next."""
        self.success(f"Initialized new project.md with {backend} backend")
        self.detail(f"Repository: {repo}")
        self.section("Created")
        for path in created:
            self.item(str(path))
        self.section("Next steps")
        self.detail("1. Edit project.md and tasks/example.md")
        self.detail("2. Set GITHUB_TOKEN environment variable")
        self.detail("3. Run: projectmd sync")
