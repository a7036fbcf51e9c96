"""
Config Provider Port - Abstract interface for loading configuration.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


DEFAULT_API_URL = "https://api.github.com"
DEFAULT_PROJECT_FILE = "project.md"


@dataclass
class TrackerConfig:
    """Credentials and connection settings for the issue tracker."""

    token: str = ""
    api_url: str = DEFAULT_API_URL
    timeout: float = 30.0


@dataclass
class SyncConfig:
    """Options for a sync run."""

    dry_run: bool = False
    verbose: bool = False


@dataclass
class AppConfig:
    """Complete application configuration."""

    tracker: TrackerConfig = field(default_factory=TrackerConfig)
    sync: SyncConfig = field(default_factory=SyncConfig)
    project_path: Path = field(default_factory=lambda: Path(DEFAULT_PROJECT_FILE))


class ConfigProviderPort(ABC):
    """Abstract interface for configuration sources."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Name of this provider."""
        ...

    @abstractmethod
    def load(self) -> AppConfig:
        """Load the complete configuration."""
        ...

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        """Get a single configuration value."""
        ...

    @abstractmethod
    def validate(self, require_token: bool = True) -> list[str]:
        """
        Validate configuration.

        Returns:
            List of error messages (empty if valid)
        """
        ...


__all__ = [
    "AppConfig",
    "ConfigProviderPort",
    "SyncConfig",
    "TrackerConfig",
    "DEFAULT_API_URL",
    "DEFAULT_PROJECT_FILE",
]
