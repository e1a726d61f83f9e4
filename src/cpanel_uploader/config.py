"""Configuration management for cpanel_uploader.

Settings are read once from the environment (after loading an optional
``.env`` file) and passed explicitly to the client and the demo sequence.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from cpanel_uploader.exceptions import ConfigurationError
from cpanel_uploader.models import Credentials

DEFAULT_HOME_BASE = "/home2"
DEFAULT_TIMEOUT = 30.0
HOST_TEMPLATE = "https://{subdomain}.mybluehost.me:2083"
WEB_ROOT = "public_html"

REQUIRED_VARIABLES = ("USERNAME", "SUBDOMAINNAME", "BLUEHOSTAPI")


@dataclass(frozen=True)
class Settings:
    """Resolved configuration for one process run."""

    username: str
    subdomain: str
    api_token: str
    home_base: str = DEFAULT_HOME_BASE
    host_override: str | None = None
    timeout: float = DEFAULT_TIMEOUT

    @property
    def base_url(self) -> str:
        if self.host_override:
            return self.host_override.rstrip("/")
        return HOST_TEMPLATE.format(subdomain=self.subdomain)

    @property
    def home_dir(self) -> str:
        """Absolute path of the account home."""
        return f"{self.home_base.rstrip('/')}/{self.username}"

    @property
    def web_root_path(self) -> str:
        """Absolute path of the publicly served directory."""
        return f"{self.home_dir}/{WEB_ROOT}"

    @property
    def credentials(self) -> Credentials:
        return Credentials(
            username=self.username,
            api_token=self.api_token,
            host_base_url=self.base_url,
        )


def load_settings(
    env_file: Path | str | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Load and validate settings.

    Args:
        env_file: Optional .env file to load before reading the environment.
            When omitted, a .env file in the working directory is used if present.
        environ: Mapping to read from instead of os.environ (no .env loading).

    Returns:
        Settings built from the environment

    Raises:
        ConfigurationError: If a required variable is missing or a value is invalid
    """
    if environ is None:
        dotenv_path = str(env_file) if env_file else find_dotenv(usecwd=True)
        if dotenv_path:
            # Existing environment variables take precedence over the file
            load_dotenv(dotenv_path, override=False)
        environ = os.environ

    missing = [key for key in REQUIRED_VARIABLES if not environ.get(key, "").strip()]
    if missing:
        raise ConfigurationError(
            f"Missing required environment variables: {', '.join(missing)}"
        )

    timeout_raw = environ.get("CPANEL_TIMEOUT", "").strip()
    try:
        timeout = float(timeout_raw) if timeout_raw else DEFAULT_TIMEOUT
    except ValueError as e:
        raise ConfigurationError(f"CPANEL_TIMEOUT must be a number, got {timeout_raw!r}") from e
    if timeout <= 0:
        raise ConfigurationError("CPANEL_TIMEOUT must be positive")

    return Settings(
        username=environ["USERNAME"].strip(),
        subdomain=environ["SUBDOMAINNAME"].strip(),
        api_token=environ["BLUEHOSTAPI"].strip(),
        home_base=environ.get("HOME_BASE", "").strip() or DEFAULT_HOME_BASE,
        host_override=environ.get("CPANEL_HOST", "").strip() or None,
        timeout=timeout,
    )
