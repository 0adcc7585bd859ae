"""
Process configuration for the OpenWeatherMap MCP server.

Settings are read once at startup and passed explicitly to the components
that talk to the provider.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping

from dotenv import load_dotenv

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

API_KEY_ENV = "OPENWEATHERMAP_API_KEY"
BASE_URL_ENV = "OPENWEATHERMAP_BASE_URL"
TIMEOUT_ENV = "OPENWEATHERMAP_TIMEOUT"

DEFAULT_BASE_URL = "https://api.openweathermap.org/data/2.5"
DEFAULT_TIMEOUT = 8.0
SERVER_NAME = "openweathermap-mcp-server"


@dataclass(frozen=True)
class Settings:
    """Immutable runtime configuration."""

    api_key: str
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    server_name: str = SERVER_NAME


def _read_timeout(raw_value: str | None) -> float:
    if raw_value is None or not raw_value.strip():
        return DEFAULT_TIMEOUT
    try:
        value = float(raw_value)
    except ValueError:
        logger.warning(
            "Invalid %s=%r. Using default=%s.", TIMEOUT_ENV, raw_value, DEFAULT_TIMEOUT
        )
        return DEFAULT_TIMEOUT
    if value <= 0:
        logger.warning(
            "%s must be positive, got %s. Using default=%s.",
            TIMEOUT_ENV,
            value,
            DEFAULT_TIMEOUT,
        )
        return DEFAULT_TIMEOUT
    return value


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    """
    Build settings from the environment, loading a local .env first.

    Variables already present in the environment take priority over .env.
    Raises ConfigurationError when the API key is missing.
    """
    if env is None:
        load_dotenv()
        env = os.environ

    api_key = (env.get(API_KEY_ENV) or "").strip()
    if not api_key:
        raise ConfigurationError(f"Missing {API_KEY_ENV} environment variable")

    base_url = (env.get(BASE_URL_ENV) or "").strip().rstrip("/") or DEFAULT_BASE_URL
    settings = Settings(
        api_key=api_key,
        base_url=base_url,
        timeout=_read_timeout(env.get(TIMEOUT_ENV)),
    )

    # Never log the key itself.
    logger.debug(
        "Settings loaded: base_url=%s timeout=%s", settings.base_url, settings.timeout
    )
    return settings


__all__ = ["DEFAULT_BASE_URL", "DEFAULT_TIMEOUT", "Settings", "load_settings"]
