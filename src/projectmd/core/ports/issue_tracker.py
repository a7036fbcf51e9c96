"""
Issue Tracker Port - Abstract interface for issue tracking backends.

The sync engine depends only on this contract. Implementations:
- GitHubAdapter (adapters/github)
- in-memory fakes in the test suite
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from ..exceptions import (
    AuthenticationError,
    BackendError,
    NotFoundError,
    PermissionDeniedError,
    RateLimitError,
)


class IssueState(Enum):
    """Open/closed state of an issue as reported by the tracker."""

    OPEN = "open"
    CLOSED = "closed"
    UNKNOWN = "unknown"

    @classmethod
    def from_string(cls, value: str) -> "IssueState":
        value = (value or "").strip().lower()
        for state in cls:
            if state.value == value:
                return state
        return cls.UNKNOWN


@dataclass
class Issue:
    """An issue as stored in the tracker."""

    id: int
    number: int
    title: str
    body: str = ""
    state: IssueState = IssueState.UNKNOWN


class IssueTrackerPort(ABC):
    """
    Abstract interface for issue trackers.

    Every operation raises BackendError (or a subclass) on failure.
    """

    @abstractmethod
    def create_issue(self, title: str, body: str, labels: list[str]) -> Issue:
        """
        Create a new issue.

        Args:
            title: Issue title
            body: Markdown body
            labels: Labels to apply

        Returns:
            The created issue, carrying its assigned number
        """
        ...

    @abstractmethod
    def update_issue(self, number: int, title: str, body: str, labels: list[str]) -> Issue:
        """
        Overwrite title, body and labels of an existing issue.

        Raises:
            NotFoundError: If no issue has this number
        """
        ...

    @abstractmethod
    def get_issue(self, number: int) -> Issue:
        """Fetch a single issue by number."""
        ...

    @abstractmethod
    def list_issues(self) -> list[Issue]:
        """List all issues (open and closed)."""
        ...


__all__ = [
    "Issue",
    "IssueState",
    "IssueTrackerPort",
    "BackendError",
    "AuthenticationError",
    "PermissionDeniedError",
    "NotFoundError",
    "RateLimitError",
]
