"""
Adapters - Concrete implementations of ports.

This module contains implementations for:
- Issue Trackers: GitHub
- Parsers: project document, task files, YAML front matter
- Config: Environment variables and .env files
"""

from .config import EnvironmentConfigProvider
from .factory import SUPPORTED_BACKENDS, create_tracker, validate_project_config
from .github import GitHubAdapter, GitHubApiClient
from .parsers import ProjectDocumentParser, TaskFileParser

__all__ = [
    "EnvironmentConfigProvider",
    "GitHubAdapter",
    "GitHubApiClient",
    "ProjectDocumentParser",
    "TaskFileParser",
    "SUPPORTED_BACKENDS",
    "create_tracker",
    "validate_project_config",
]
