"""
Domain - Entities and events of a project plan.
"""

from .entities import (
    ProjectConfig,
    ProjectDocument,
    TaskFile,
    TaskFileConfig,
    TaskItem,
    TaskStatus,
    format_timestamp,
    parse_timestamp,
)
from .events import (
    DomainEvent,
    EventBus,
    IssueCreated,
    IssueUpdated,
    ProjectDocumentUpdated,
    SyncCompleted,
    SyncStarted,
    TaskFailed,
    TaskSkipped,
)

__all__ = [
    "ProjectConfig",
    "ProjectDocument",
    "TaskFile",
    "TaskFileConfig",
    "TaskItem",
    "TaskStatus",
    "format_timestamp",
    "parse_timestamp",
    "DomainEvent",
    "EventBus",
    "IssueCreated",
    "IssueUpdated",
    "ProjectDocumentUpdated",
    "SyncCompleted",
    "SyncStarted",
    "TaskFailed",
    "TaskSkipped",
]
