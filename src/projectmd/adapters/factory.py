"""
Tracker Factory - Select the issue tracker named in the project front matter.
"""

from typing import Optional

from ..core.domain.entities import ProjectConfig
from ..core.exceptions import ConfigError
from ..core.ports.config_provider import TrackerConfig
from ..core.ports.issue_tracker import IssueTrackerPort
from .github import GitHubAdapter, split_repo


SUPPORTED_BACKENDS = ("github",)


def validate_project_config(config: ProjectConfig) -> None:
    """
    Check that the backend is supported and the repo reference is usable.

    Raises:
        ConfigError: On an unsupported backend or malformed repo
    """
    if config.backend not in SUPPORTED_BACKENDS:
        raise ConfigError(
            f"Unsupported backend: {config.backend}. "
            f"Only {', '.join(repr(b) for b in SUPPORTED_BACKENDS)} is currently supported."
        )
    split_repo(config.repo)


def create_tracker(
    config: ProjectConfig,
    tracker_config: Optional[TrackerConfig] = None,
) -> IssueTrackerPort:
    """Build the tracker adapter for a project."""
    validate_project_config(config)
    return GitHubAdapter(config.repo, config=tracker_config)
