"""
Environment Config Provider - Load configuration from environment variables.

Supports:
- Environment variables (GITHUB_TOKEN, GITHUB_API_URL, PROJECTMD_*)
- .env files
- Command line argument overrides
"""

import os
from pathlib import Path
from typing import Any, Optional

from ...core.ports.config_provider import (
    DEFAULT_API_URL,
    DEFAULT_PROJECT_FILE,
    AppConfig,
    ConfigProviderPort,
    SyncConfig,
    TrackerConfig,
)


class EnvironmentConfigProvider(ConfigProviderPort):
    """
    Configuration provider that loads from environment variables and .env files.

    Precedence, lowest first: .env file, environment, CLI overrides.
    """

    ENV_MAPPING = {
        "GITHUB_TOKEN": "github_token",
        "GITHUB_API_URL": "api_url",
        "PROJECTMD_FILE": "project_file",
        "PROJECTMD_VERBOSE": "verbose",
        "PROJECTMD_TIMEOUT": "timeout",
    }

    def __init__(
        self,
        env_file: Optional[Path] = None,
        cli_overrides: Optional[dict[str, Any]] = None,
        environ: Optional[dict[str, str]] = None,
    ):
        """
        Initialize the config provider.

        Args:
            env_file: Path to .env file (auto-detected if not specified)
            cli_overrides: Command line argument overrides
            environ: Environment mapping (defaults to os.environ)
        """
        self._values: dict[str, Any] = {}
        self._env_file = env_file
        self._cli_overrides = {
            self._normalize(k): v
            for k, v in (cli_overrides or {}).items()
            if v is not None
        }
        self._environ = os.environ if environ is None else environ

        self._load_env_file()
        self._load_environment()

    # -------------------------------------------------------------------------
    # ConfigProviderPort Implementation
    # -------------------------------------------------------------------------

    @property
    def name(self) -> str:
        return "Environment"

    def load(self) -> AppConfig:
        """Load complete configuration."""
        tracker = TrackerConfig(
            token=self.get("github_token", "") or "",
            api_url=self.get("api_url", DEFAULT_API_URL) or DEFAULT_API_URL,
            timeout=self._as_float(self.get("timeout"), 30.0),
        )

        sync = SyncConfig(
            dry_run=self._as_bool(self.get("dry_run", False)),
            verbose=self._as_bool(self.get("verbose", False)),
        )

        return AppConfig(
            tracker=tracker,
            sync=sync,
            project_path=Path(self.get("project_file", DEFAULT_PROJECT_FILE)),
        )

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value."""
        key = self._normalize(key)

        if key in self._cli_overrides:
            return self._cli_overrides[key]

        return self._values.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value."""
        self._values[self._normalize(key)] = value

    def validate(self, require_token: bool = True) -> list[str]:
        """Validate configuration."""
        errors = []

        if require_token and not self.get("github_token"):
            errors.append(
                "GitHub token is required. Set GITHUB_TOKEN env var or use --github-token"
            )

        timeout = self.get("timeout")
        if timeout is not None and self._as_float(timeout, -1.0) <= 0:
            errors.append(f"Invalid timeout: {timeout}")

        return errors

    # -------------------------------------------------------------------------
    # Private Methods
    # -------------------------------------------------------------------------

    @staticmethod
    def _normalize(key: str) -> str:
        return key.lower().replace("-", "_")

    def _load_env_file(self) -> None:
        """Load values from .env file."""
        env_file = self._find_env_file()
        if not env_file:
            return

        for line in env_file.read_text(encoding="utf-8").splitlines():
            line = line.strip()

            # Skip empty lines and comments
            if not line or line.startswith("#"):
                continue

            if "=" not in line:
                continue

            key, value = line.split("=", 1)
            key = key.strip().removeprefix("export ").strip()
            value = value.strip().strip('"').strip("'")

            config_key = self.ENV_MAPPING.get(key.upper())
            if config_key:
                self._values[config_key] = value

    def _find_env_file(self) -> Optional[Path]:
        """Find .env file."""
        if self._env_file:
            return self._env_file if self._env_file.exists() else None

        cwd_env = Path.cwd() / ".env"
        if cwd_env.exists():
            return cwd_env

        return None

    def _load_environment(self) -> None:
        """Load values from environment variables."""
        for env_key, config_key in self.ENV_MAPPING.items():
            raw_value = self._environ.get(env_key)
            if raw_value is not None:
                self._values[config_key] = raw_value

    @staticmethod
    def _as_bool(value: Any) -> bool:
        if isinstance(value, str):
            return value.strip().lower() in ("true", "1", "yes", "on")
        return bool(value)

    @staticmethod
    def _as_float(value: Any, default: float) -> float:
        if value is None or value == "":
            return default
        try:
            return float(value)
        except (TypeError, ValueError):
            return default
