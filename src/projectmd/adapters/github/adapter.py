"""
GitHub Adapter - Implements IssueTrackerPort for GitHub issues.

This is the main entry point for GitHub integration.
"""

import logging
from typing import Any, Optional

from ...core.exceptions import ConfigError
from ...core.ports.config_provider import TrackerConfig
from ...core.ports.issue_tracker import Issue, IssueState, IssueTrackerPort
from .client import GitHubApiClient


def split_repo(repo: str) -> tuple[str, str]:
    """
    Split an 'owner/name' repository reference.

    Raises:
        ConfigError: If the reference is not exactly two non-empty parts
    """
    parts = repo.strip().split("/")
    if len(parts) != 2 or not all(parts):
        raise ConfigError(f"Invalid repo format '{repo}'. Expected: owner/repo")
    return parts[0], parts[1]


class GitHubAdapter(IssueTrackerPort):
    """
    GitHub implementation of the IssueTrackerPort.

    Translates between the Issue model and GitHub's issues API.
    """

    def __init__(
        self,
        repo: str,
        config: Optional[TrackerConfig] = None,
        client: Optional[GitHubApiClient] = None,
    ):
        """
        Initialize the GitHub adapter.

        Args:
            repo: Repository in owner/name form
            config: Tracker configuration (token, API URL, timeout)
            client: Optional pre-built API client
        """
        self.owner, self.repo = split_repo(repo)
        self.config = config or TrackerConfig()
        self.logger = logging.getLogger("GitHubAdapter")

        self._client = client or GitHubApiClient(
            token=self.config.token,
            base_url=self.config.api_url,
            timeout=self.config.timeout,
        )

    @property
    def name(self) -> str:
        return "GitHub"

    @property
    def issues_endpoint(self) -> str:
        return f"repos/{self.owner}/{self.repo}/issues"

    # -------------------------------------------------------------------------
    # IssueTrackerPort Implementation
    # -------------------------------------------------------------------------

    def create_issue(self, title: str, body: str, labels: list[str]) -> Issue:
        data = self._client.post(
            self.issues_endpoint,
            json={"title": title, "body": body, "labels": list(labels)},
        )
        issue = self._parse_issue(data)
        self.logger.info(f"Created issue #{issue.number} in {self.owner}/{self.repo}")
        return issue

    def update_issue(self, number: int, title: str, body: str, labels: list[str]) -> Issue:
        data = self._client.patch(
            f"{self.issues_endpoint}/{number}",
            json={"title": title, "body": body, "labels": list(labels)},
        )
        issue = self._parse_issue(data)
        self.logger.info(f"Updated issue #{issue.number} in {self.owner}/{self.repo}")
        return issue

    def get_issue(self, number: int) -> Issue:
        data = self._client.get(f"{self.issues_endpoint}/{number}")
        return self._parse_issue(data)

    def list_issues(self) -> list[Issue]:
        issues = [
            self._parse_issue(item)
            for item in self._client.paginate(self.issues_endpoint, params={"state": "all"})
            # The issues endpoint also returns pull requests
            if "pull_request" not in item
        ]
        self.logger.debug(f"Listed {len(issues)} issues in {self.owner}/{self.repo}")
        return issues

    # -------------------------------------------------------------------------
    # Private Methods
    # -------------------------------------------------------------------------

    def _parse_issue(self, data: dict[str, Any]) -> Issue:
        """Parse GitHub API response into Issue."""
        return Issue(
            id=data.get("id", 0),
            number=data["number"],
            title=data.get("title", ""),
            body=data.get("body") or "",
            state=IssueState.from_string(data.get("state", "")),
        )
