"""
Ports - Abstract interfaces for external dependencies.

Ports define the contracts that adapters must implement.
This enables dependency inversion and easy testing.
"""

from .issue_tracker import (
    AuthenticationError,
    BackendError,
    Issue,
    IssueState,
    IssueTrackerPort,
    NotFoundError,
    PermissionDeniedError,
    RateLimitError,
)
from .config_provider import (
    AppConfig,
    ConfigProviderPort,
    SyncConfig,
    TrackerConfig,
)

__all__ = [
    "IssueTrackerPort",
    "Issue",
    "IssueState",
    "BackendError",
    "AuthenticationError",
    "PermissionDeniedError",
    "NotFoundError",
    "RateLimitError",
    "ConfigProviderPort",
    "AppConfig",
    "SyncConfig",
    "TrackerConfig",
]
