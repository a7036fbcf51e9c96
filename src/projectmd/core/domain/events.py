"""
Domain Events - Things that happened during a sync.

Events are immutable records of something that occurred.
They let the CLI (or any other subscriber) follow a sync as it runs.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Optional
from uuid import uuid4


@dataclass(frozen=True)
class DomainEvent:
    """Base class for all domain events."""

    event_id: str = field(default_factory=lambda: str(uuid4()))
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def event_type(self) -> str:
        """Get the event type name."""
        return self.__class__.__name__


@dataclass(frozen=True)
class SyncStarted(DomainEvent):
    """Event: A sync run started."""

    project_path: str = ""
    task_count: int = 0
    dry_run: bool = False


@dataclass(frozen=True)
class IssueCreated(DomainEvent):
    """Event: A new issue was created for a task file."""

    task_path: str = ""
    issue_number: Optional[int] = None
    title: str = ""


@dataclass(frozen=True)
class IssueUpdated(DomainEvent):
    """Event: An existing issue was overwritten from its task file."""

    task_path: str = ""
    issue_number: Optional[int] = None
    title: str = ""


@dataclass(frozen=True)
class TaskSkipped(DomainEvent):
    """Event: A task was unchanged since its last sync."""

    task_path: str = ""
    issue_number: Optional[int] = None


@dataclass(frozen=True)
class TaskFailed(DomainEvent):
    """Event: A task could not be synced."""

    task_path: str = ""
    error: str = ""


@dataclass(frozen=True)
class ProjectDocumentUpdated(DomainEvent):
    """Event: New issue numbers were written back to the project document."""

    project_path: str = ""
    replacements: int = 0


@dataclass(frozen=True)
class SyncCompleted(DomainEvent):
    """Event: A sync run finished."""

    project_path: str = ""
    created: int = 0
    updated: int = 0
    skipped: int = 0
    errors: list = field(default_factory=list)


class EventBus:
    """
    Simple event bus for publishing and subscribing to domain events.

    Subscribing to DomainEvent receives every event.
    """

    def __init__(self):
        self._handlers: dict[type, list[Callable[[DomainEvent], None]]] = {}
        self._history: list[DomainEvent] = []

    def subscribe(self, event_type: type, handler: Callable[[DomainEvent], None]) -> None:
        """Subscribe a handler to an event type."""
        self._handlers.setdefault(event_type, []).append(handler)

    def publish(self, event: DomainEvent) -> None:
        """Publish an event to all subscribers."""
        self._history.append(event)

        for handler in self._handlers.get(type(event), []):
            handler(event)

        # Catch-all handlers
        if type(event) is not DomainEvent:
            for handler in self._handlers.get(DomainEvent, []):
                handler(event)

    def get_history(self) -> list[DomainEvent]:
        """Get all published events."""
        return self._history.copy()

    def clear_history(self) -> None:
        """Clear event history."""
        self._history.clear()
