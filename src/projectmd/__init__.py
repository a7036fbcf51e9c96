"""
projectmd - Plain-text project management synced with an issue tracker.

A project document (project.md) lists tasks by reference to task files;
`projectmd sync` creates or updates one issue per task file and writes
issue numbers and timestamps back into the files.
"""

__version__ = "0.1.0"

from .core.domain import (
    ProjectConfig,
    ProjectDocument,
    TaskFile,
    TaskFileConfig,
    TaskItem,
    TaskStatus,
)
from .core.exceptions import (
    BackendError,
    ConfigError,
    FileAccessError,
    ParseError,
    ProjectMdError,
)
from .core.ports import Issue, IssueState, IssueTrackerPort
from .adapters.parsers import ProjectDocumentParser, TaskFileParser
from .application.sync import SyncEngine, SyncResult

__all__ = [
    "__version__",
    "ProjectConfig",
    "ProjectDocument",
    "TaskFile",
    "TaskFileConfig",
    "TaskItem",
    "TaskStatus",
    "BackendError",
    "ConfigError",
    "FileAccessError",
    "ParseError",
    "ProjectMdError",
    "Issue",
    "IssueState",
    "IssueTrackerPort",
    "ProjectDocumentParser",
    "TaskFileParser",
    "SyncEngine",
    "SyncResult",
]
