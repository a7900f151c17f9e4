"""
Configuration module for the SportsChaos client.
Values come from the environment, with defaults for the hosted service.
"""

import os
from typing import Dict, Any

from SportsChaos.api.client import GatewayTimeouts
from SportsChaos.core.client.utils.constants import (
    CONNECT_TIMEOUT_SECONDS,
    DEFAULT_BASE_URL,
    DEFAULT_STORE_FILE,
    READ_TIMEOUT_SECONDS,
    WRITE_TIMEOUT_SECONDS,
)


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number of seconds, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {raw!r}")
    return value


class Config:
    """Application configuration class."""

    # Auth service
    BASE_URL = os.environ.get("SPORTSCHAOS_BASE_URL", DEFAULT_BASE_URL)

    # Timeouts, seconds
    CONNECT_TIMEOUT = _env_float("SPORTSCHAOS_CONNECT_TIMEOUT", CONNECT_TIMEOUT_SECONDS)
    READ_TIMEOUT = _env_float("SPORTSCHAOS_READ_TIMEOUT", READ_TIMEOUT_SECONDS)
    WRITE_TIMEOUT = _env_float("SPORTSCHAOS_WRITE_TIMEOUT", WRITE_TIMEOUT_SECONDS)

    # Credential store file
    STORE_FILE = os.environ.get("SPORTSCHAOS_STORE", DEFAULT_STORE_FILE)

    # Logging environment (development, production, testing)
    ENV = os.environ.get("SPORTSCHAOS_ENV", "production")

    @classmethod
    def timeouts(cls) -> GatewayTimeouts:
        return GatewayTimeouts(
            connect=cls.CONNECT_TIMEOUT,
            read=cls.READ_TIMEOUT,
            write=cls.WRITE_TIMEOUT,
        )

    @classmethod
    def get_config(cls) -> Dict[str, Any]:
        """Get all configuration values as a dictionary."""
        return {
            "BASE_URL": cls.BASE_URL,
            "CONNECT_TIMEOUT": cls.CONNECT_TIMEOUT,
            "READ_TIMEOUT": cls.READ_TIMEOUT,
            "WRITE_TIMEOUT": cls.WRITE_TIMEOUT,
            "STORE_FILE": cls.STORE_FILE,
            "ENV": cls.ENV,
        }


# Create config instance
config = Config()
