"""
Exceptions - Centralized exception hierarchy for projectmd.

Every error raised by the core, the adapters and the application layer
derives from ProjectMdError so callers can catch one base class.

Scoping (see SyncEngine):
- ParseError / FileAccessError: fatal for the project document,
  recorded per task for task files.
- BackendError: always recorded per task.
- ConfigError: fatal before any task is processed.
"""

from pathlib import Path
from typing import Optional, Union


class ProjectMdError(Exception):
    """Base exception for all projectmd errors."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        return self.message


# -------------------------------------------------------------------------
# Parsing
# -------------------------------------------------------------------------

class ParseError(ProjectMdError):
    """A document or task file does not have the required structure."""

    def __init__(
        self,
        message: str,
        line: Optional[int] = None,
        source: Optional[str] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message, cause=cause)
        self.line = line
        self.source = source

    def __str__(self) -> str:
        location = []
        if self.source:
            location.append(self.source)
        if self.line is not None:
            location.append(f"line {self.line}")
        if location:
            return f"{', '.join(location)}: {self.message}"
        return self.message


# -------------------------------------------------------------------------
# File system
# -------------------------------------------------------------------------

class FileAccessError(ProjectMdError):
    """A file could not be read or written."""

    def __init__(
        self,
        message: str,
        path: Optional[Union[str, Path]] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message, cause=cause)
        self.path = path


# -------------------------------------------------------------------------
# Configuration
# -------------------------------------------------------------------------

class ConfigError(ProjectMdError):
    """Invalid or unsupported configuration (e.g. unknown backend)."""


# -------------------------------------------------------------------------
# Issue tracker backend
# -------------------------------------------------------------------------

class BackendError(ProjectMdError):
    """Base exception for issue tracker failures."""

    def __init__(
        self,
        message: str,
        issue_number: Optional[int] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message, cause=cause)
        self.issue_number = issue_number


class AuthenticationError(BackendError):
    """The tracker rejected the credentials."""


class PermissionDeniedError(BackendError):
    """The credentials are valid but lack access to the resource."""


class NotFoundError(BackendError):
    """The requested issue or repository does not exist."""


class RateLimitError(BackendError):
    """The tracker's rate limit is exhausted."""

    def __init__(
        self,
        message: str,
        retry_after: Optional[int] = None,
        issue_number: Optional[int] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message, issue_number=issue_number, cause=cause)
        self.retry_after = retry_after


__all__ = [
    "ProjectMdError",
    "ParseError",
    "FileAccessError",
    "ConfigError",
    "BackendError",
    "AuthenticationError",
    "PermissionDeniedError",
    "NotFoundError",
    "RateLimitError",
]
