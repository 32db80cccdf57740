"""
Settings for the storefront gateway.

Values come from the process environment, optionally seeded from a
``.env`` file in the working directory.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from dotenv import find_dotenv, load_dotenv

from storefront_gateway.core.exceptions import ConfigurationError, ValidationError
from storefront_gateway.core.validation import validate_base_url

DEFAULT_SESSION_SECRET = "your-secret-key"
DEFAULT_CACHE_TTL = 300  # 5 minutes
DEFAULT_TIMEOUT = 30
DEFAULT_RATE_LIMIT_BACKOFF = 2.0


@dataclass(frozen=True)
class GatewaySettings:
    """Configuration consumed by the gateway client.

    ``session_secret`` is not used by the client itself. It is carried for
    the web layer hosting the gateway, which signs its session cookies
    with it and keeps each admin SessionToken in that session.
    """

    base_url: str
    session_secret: str = DEFAULT_SESSION_SECRET
    cache_ttl: int = DEFAULT_CACHE_TTL
    timeout: int = DEFAULT_TIMEOUT
    rate_limit_backoff: float = DEFAULT_RATE_LIMIT_BACKOFF
    log_level: str = "info"

    @classmethod
    def from_env(
        cls,
        env: Mapping[str, str] | None = None,
        env_file: Path | None = None,
        base_url: str | None = None,
    ) -> "GatewaySettings":
        """Build settings from environment variables.

        Args:
            env: Mapping to read instead of ``os.environ`` (no .env loading).
            env_file: Explicit .env file; defaults to one found from the cwd.
            base_url: Takes precedence over API_BASE_URL. Every other
                setting is still read from the environment.

        Returns:
            GatewaySettings instance.

        Raises:
            ConfigurationError: If no base URL is given or set, or a value
                is invalid.
        """
        if env is None:
            dotenv_path = env_file or find_dotenv(usecwd=True)
            if dotenv_path:
                load_dotenv(dotenv_path)
            env = os.environ

        raw_url = base_url or env.get("API_BASE_URL", "")
        if not raw_url:
            raise ConfigurationError("API_BASE_URL", "Backend base URL is not set")
        try:
            base_url = validate_base_url(raw_url)
        except ValidationError as e:
            raise ConfigurationError("API_BASE_URL", e.details)

        return cls(
            base_url=base_url,
            session_secret=env.get("SESSION_SECRET") or DEFAULT_SESSION_SECRET,
            cache_ttl=_read_number(env, "CACHE_TTL", DEFAULT_CACHE_TTL, int),
            timeout=_read_number(env, "REQUEST_TIMEOUT", DEFAULT_TIMEOUT, int),
            rate_limit_backoff=_read_number(
                env, "RATE_LIMIT_BACKOFF", DEFAULT_RATE_LIMIT_BACKOFF, float
            ),
            log_level=env.get("LOG_LEVEL", "info").lower(),
        )


def _read_number(env: Mapping[str, str], name: str, default, cast):
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = cast(raw)
    except ValueError:
        raise ConfigurationError(name, f"Expected a number, got '{raw}'")
    if value < 0:
        raise ConfigurationError(name, "Value must not be negative")
    return value
