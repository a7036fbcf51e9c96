"""
GitHub Adapter - Implementation of IssueTrackerPort for GitHub issues.
"""

from .adapter import GitHubAdapter, split_repo
from .client import GitHubApiClient

__all__ = [
    "GitHubAdapter",
    "GitHubApiClient",
    "split_repo",
]
