"""
Application Layer - Use cases and orchestration.

This layer contains:
- sync/: The reconciliation engine
- status: Read-only project report
- scaffold: Project initialization
"""

from .sync import SyncAction, SyncEngine, SyncResult
from .status import StatusReport, TaskStatusEntry, TrackerSummary, build_status
from .scaffold import init_project

__all__ = [
    "SyncAction",
    "SyncEngine",
    "SyncResult",
    "StatusReport",
    "TaskStatusEntry",
    "TrackerSummary",
    "build_status",
    "init_project",
]
