"""Configuration management for the concourse command line tool.

Settings come from explicit overrides (command line options) layered over
CONCOURSE_* environment variables.
"""

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from .http import DEFAULT_TIMEOUT
from .session import DEFAULT_TEAM_NAME

DEFAULT_LOG_LEVEL = "warning"
VALID_LOG_LEVELS = ["debug", "info", "warning", "error"]

ENVIRONMENT_VARIABLES = {
    "url": "CONCOURSE_URL",
    "team_name": "CONCOURSE_TEAM",
    "username": "CONCOURSE_USERNAME",
    "password": "CONCOURSE_PASSWORD",
    "log_level": "CONCOURSE_LOG_LEVEL",
    "timeout": "CONCOURSE_TIMEOUT",
}

logger = logging.getLogger(__name__)


@dataclass
class ClientConfig:
    """Configuration for the concourse command line tool.

    Args:
        url: Concourse server URL
        team_name: Team to operate on (default: main)
        username: Basic auth username
        password: Basic auth password
        log_level: Logging level (debug/info/warning/error, default: warning)
        timeout: Request timeout in seconds
    """

    url: str
    team_name: str = DEFAULT_TEAM_NAME
    username: Optional[str] = None
    password: Optional[str] = None
    log_level: str = DEFAULT_LOG_LEVEL
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self):
        """Validate configuration after initialization."""
        if not self.url:
            raise ValueError("url cannot be empty")

        if not self.team_name:
            raise ValueError("team_name cannot be empty")

        self.log_level = self.log_level.lower()
        if self.log_level not in VALID_LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {VALID_LOG_LEVELS}. "
                f"Got: {self.log_level}"
            )

        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive. Got: {self.timeout}")

        self.url = self.url.rstrip("/")

    @property
    def logging_level(self) -> int:
        return int(getattr(logging, self.log_level.upper()))


def load_config(
    overrides: Optional[Mapping[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> ClientConfig:
    """Load configuration from environment variables and overrides.

    Args:
        overrides: Explicit values; None entries are ignored
        environ: Environment to read (default: os.environ)

    Returns:
        ClientConfig instance

    Raises:
        ValueError: If required fields are missing or values are invalid

    Environment Variables:
        CONCOURSE_URL: Server URL
        CONCOURSE_TEAM: Team name
        CONCOURSE_USERNAME / CONCOURSE_PASSWORD: Basic auth credentials
        CONCOURSE_LOG_LEVEL: Log level
        CONCOURSE_TIMEOUT: Timeout in seconds
    """
    environ = os.environ if environ is None else environ
    config_data: Dict[str, Any] = {}

    for field, variable in ENVIRONMENT_VARIABLES.items():
        if variable in environ:
            config_data[field] = environ[variable]

    if "timeout" in config_data:
        try:
            config_data["timeout"] = float(config_data["timeout"])
        except ValueError:
            raise ValueError(
                f"{ENVIRONMENT_VARIABLES['timeout']} must be a number. "
                f"Got: {config_data['timeout']}"
            )

    for field, value in (overrides or {}).items():
        if value is not None:
            config_data[field] = value

    if "url" not in config_data:
        raise ValueError(
            "Missing required field: url\n"
            "  Fix: Set CONCOURSE_URL environment variable\n"
            "  Or: Pass --url"
        )

    if ("username" in config_data) != ("password" in config_data):
        logger.warning("Only one of username and password is configured")

    return ClientConfig(**config_data)
