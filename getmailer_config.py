"""
getmailer_config.py
-------------------
Process-wide settings for the GetMailer MCP server.

Read once from the environment at startup and passed explicitly to the
client and dispatcher. Entry points call load_dotenv() first so a local
.env file works the same way as exported variables.

Environment:
    GETMAILER_API_KEY          → bearer key (optional while signup is enabled)
    GETMAILER_API_URL          → API origin (default https://getmailer.app)
    GETMAILER_SIGNUP_ENABLED   → expose the public signup tool (default true)
    GETMAILER_TIMEOUT_SECONDS  → per-request timeout (default: none)
    GETMAILER_LOG_LEVEL        → logging level (default INFO)
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

__version__ = "1.1.0"

DEFAULT_API_URL = "https://getmailer.app"

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(message)s"

_TRUTHY = {"1", "true", "yes", "on"}


class ConfigurationError(Exception):
    """Required configuration is missing or invalid."""


@dataclass(frozen=True)
class Settings:
    api_url: str = DEFAULT_API_URL
    api_key: Optional[str] = None
    signup_enabled: bool = True
    timeout: Optional[float] = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ

        api_url = (env.get("GETMAILER_API_URL") or DEFAULT_API_URL).rstrip("/")
        api_key = env.get("GETMAILER_API_KEY") or None

        raw_signup = env.get("GETMAILER_SIGNUP_ENABLED")
        signup_enabled = True if raw_signup is None else raw_signup.strip().lower() in _TRUTHY

        raw_timeout = env.get("GETMAILER_TIMEOUT_SECONDS")
        timeout = None
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                raise ConfigurationError(
                    f"GETMAILER_TIMEOUT_SECONDS must be a number, got {raw_timeout!r}"
                )

        log_level = (env.get("GETMAILER_LOG_LEVEL") or "INFO").upper()

        return cls(
            api_url=api_url,
            api_key=api_key,
            signup_enabled=signup_enabled,
            timeout=timeout,
            log_level=log_level,
        )

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)

    def require_startup_key(self) -> None:
        """
        Without self-service signup no tool can succeed unauthenticated,
        so a missing key is fatal at startup instead of at call time.
        """
        if not self.signup_enabled and not self.has_api_key:
            raise ConfigurationError("GETMAILER_API_KEY environment variable is required")

    def __repr__(self) -> str:
        key = "set" if self.has_api_key else "unset"
        return (
            f"Settings(api_url={self.api_url!r}, api_key=<{key}>, "
            f"signup_enabled={self.signup_enabled}, timeout={self.timeout})"
        )


def configure_logging(settings: Settings) -> None:
    """Log to stderr; stdout carries the MCP channel."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format=LOG_FORMAT,
    )
