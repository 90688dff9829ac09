"""
Configuration management for Course Sync.

Settings come from the environment (optionally seeded from a .env file):
- CANVAS_URL: Base URL of the Canvas instance, e.g. https://school.instructure.com
- CANVAS_TOKEN: Access token sent as a Bearer token
- CANVAS_TIMEOUT: Request timeout in seconds (default 60)
- CANVAS_MAX_CONCURRENCY: Max simultaneous API requests (default 8)
- CANVAS_MAX_RETRIES: Retries for a failed folder listing (default 3)
- CANVAS_RETRY_DELAY: Base backoff delay in seconds (default 1.0)
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .errors import ConfigError


def load_env_file(path: Path) -> int:
    """
    Load KEY=VALUE lines from a .env file into os.environ.

    Existing environment variables win over the file.

    Returns:
        Number of lines that were parsed as assignments
    """
    if not path.exists():
        return 0

    loaded = 0
    with open(path, encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if line and not line.startswith("#") and "=" in line:
                key, value = line.split("=", 1)
                value = value.strip().strip('"').strip("'")
                os.environ.setdefault(key.strip(), value)
                loaded += 1
    return loaded


def _int_env(name: str, default: int) -> int:
    raw = os.environ.get(name, "")
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}")


def _float_env(name: str, default: float) -> float:
    raw = os.environ.get(name, "")
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}")


@dataclass
class CanvasClientConfig:
    """Configuration for CanvasClient."""
    base_url: str
    access_token: str
    timeout: int = 60
    max_retries: int = 3
    retry_delay: float = 1.0  # Base delay for exponential backoff (seconds)
    per_page: int = 100
    max_concurrency: int = 8

    def __post_init__(self):
        self.base_url = (self.base_url or "").strip().rstrip("/")
        self.access_token = (self.access_token or "").strip()

    @property
    def api_base(self) -> str:
        return f"{self.base_url}/api/v1"

    def validate(self):
        """Raise ConfigError if the config can't be used to talk to Canvas."""
        if not self.base_url:
            raise ConfigError("Canvas URL is not set (use --url or CANVAS_URL)")
        if not self.base_url.startswith(("http://", "https://")):
            raise ConfigError(f"Canvas URL must start with http:// or https://, got {self.base_url!r}")
        if not self.access_token:
            raise ConfigError("Canvas access token is not set (use --token or CANVAS_TOKEN)")
        if self.max_concurrency < 1:
            raise ConfigError("max_concurrency must be at least 1")
        if self.max_retries < 0:
            raise ConfigError("max_retries must not be negative")
        if self.retry_delay < 0:
            raise ConfigError("retry_delay must not be negative")

    @classmethod
    def from_env(
        cls,
        base_url: Optional[str] = None,
        access_token: Optional[str] = None,
    ) -> "CanvasClientConfig":
        """
        Build a config from environment variables.

        Explicit arguments (e.g. from CLI flags) override the environment.
        """
        config = cls(
            base_url=base_url or os.environ.get("CANVAS_URL", ""),
            access_token=access_token or os.environ.get("CANVAS_TOKEN", ""),
            timeout=_int_env("CANVAS_TIMEOUT", 60),
            max_concurrency=_int_env("CANVAS_MAX_CONCURRENCY", 8),
            max_retries=_int_env("CANVAS_MAX_RETRIES", 3),
            retry_delay=_float_env("CANVAS_RETRY_DELAY", 1.0),
        )
        config.validate()
        return config
