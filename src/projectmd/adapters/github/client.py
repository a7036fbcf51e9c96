"""
GitHub API Client - Low-level HTTP client for the GitHub REST API.

This handles the raw HTTP communication with GitHub.
The GitHubAdapter uses this to implement the IssueTrackerPort.
"""

import logging
from typing import Any, Iterator, Optional

import requests

from ...core.ports.config_provider import DEFAULT_API_URL
from ...core.ports.issue_tracker import (
    AuthenticationError,
    BackendError,
    NotFoundError,
    PermissionDeniedError,
    RateLimitError,
)


class GitHubApiClient:
    """
    Low-level GitHub REST API client.

    Handles authentication, request/response, pagination and error handling.
    """

    API_VERSION = "2022-11-28"
    PER_PAGE = 100

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_API_URL,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the GitHub client.

        Args:
            token: Personal access token
            base_url: API root (override for GitHub Enterprise)
            timeout: Seconds to wait for each request
            session: Optional pre-configured session
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.logger = logging.getLogger("GitHubApiClient")

        self.headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": self.API_VERSION,
        }
        if token:
            self.headers["Authorization"] = f"Bearer {token}"

        self._session = session or requests.Session()
        self._session.headers.update(self.headers)

    # -------------------------------------------------------------------------
    # Core Request Methods
    # -------------------------------------------------------------------------

    def request(
        self,
        method: str,
        endpoint: str,
        **kwargs
    ) -> Any:
        """
        Make an authenticated request to the GitHub API.

        Args:
            method: HTTP method (GET, POST, PATCH)
            endpoint: API endpoint (e.g., 'repos/owner/name/issues/1')
            **kwargs: Additional arguments for requests

        Returns:
            Decoded JSON response

        Raises:
            BackendError: On API errors
        """
        response = self._send(method, self._url(endpoint), **kwargs)
        return self._handle_response(response, endpoint)

    def get(self, endpoint: str, **kwargs) -> Any:
        """GET request."""
        return self.request("GET", endpoint, **kwargs)

    def post(self, endpoint: str, json: Optional[dict] = None, **kwargs) -> Any:
        """POST request."""
        return self.request("POST", endpoint, json=json, **kwargs)

    def patch(self, endpoint: str, json: Optional[dict] = None, **kwargs) -> Any:
        """PATCH request."""
        return self.request("PATCH", endpoint, json=json, **kwargs)

    def paginate(self, endpoint: str, params: Optional[dict] = None) -> Iterator[dict]:
        """
        Iterate over every item of a list endpoint, following Link headers.

        Args:
            endpoint: API endpoint returning a JSON array
            params: Query parameters for the first page
        """
        params = dict(params or {})
        params.setdefault("per_page", self.PER_PAGE)

        url: Optional[str] = self._url(endpoint)
        page = 0
        while url:
            page += 1
            response = self._send("GET", url, params=params)
            items = self._handle_response(response, endpoint)
            self.logger.debug(f"Fetched page {page} of {endpoint} ({len(items)} items)")
            yield from items

            # The next link already carries the query string
            url = response.links.get("next", {}).get("url")
            params = None

    # -------------------------------------------------------------------------
    # Response Handling
    # -------------------------------------------------------------------------

    def _url(self, endpoint: str) -> str:
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    def _send(self, method: str, url: str, **kwargs) -> requests.Response:
        kwargs.setdefault("timeout", self.timeout)
        try:
            return self._session.request(method, url, **kwargs)
        except requests.exceptions.Timeout as e:
            raise BackendError(f"Request timed out: {e}", cause=e) from e
        except requests.exceptions.ConnectionError as e:
            raise BackendError(f"Connection failed: {e}", cause=e) from e
        except requests.exceptions.RequestException as e:
            raise BackendError(f"Request failed: {e}", cause=e) from e

    def _handle_response(
        self,
        response: requests.Response,
        endpoint: str
    ) -> Any:
        """Handle API response and errors."""
        if response.ok:
            if response.text:
                return response.json()
            return {}

        status = response.status_code
        message = self._error_message(response)

        if status == 401:
            raise AuthenticationError(
                "Authentication failed. Check GITHUB_TOKEN."
            )

        if status == 429 or (status == 403 and response.headers.get("X-RateLimit-Remaining") == "0"):
            retry_after = response.headers.get("Retry-After")
            raise RateLimitError(
                f"Rate limit exceeded for {endpoint}: {message}",
                retry_after=int(retry_after) if retry_after and retry_after.isdigit() else None,
            )

        if status == 403:
            raise PermissionDeniedError(f"Permission denied for {endpoint}: {message}")

        if status in (404, 410):
            raise NotFoundError(f"Not found: {endpoint}")

        raise BackendError(f"API error {status} for {endpoint}: {message}")

    def _error_message(self, response: requests.Response) -> str:
        """Best-effort extraction of GitHub's error message."""
        try:
            data = response.json()
        except ValueError:
            return response.text[:500] if response.text else ""

        if not isinstance(data, dict):
            return str(data)[:500]

        message = data.get("message", "")
        details = [
            e.get("message") or e.get("code", "")
            for e in data.get("errors", [])
            if isinstance(e, dict)
        ]
        if details:
            message = f"{message} ({'; '.join(d for d in details if d)})"
        return message
