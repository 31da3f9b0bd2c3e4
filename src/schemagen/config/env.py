"""Typed environment variable parsing helpers."""

import os
from typing import Optional

from schemagen.errors import ConfigurationError

ENV_PREFIX = "SCHEMAGEN_"

_TRUTHY = ("true", "1", "yes", "on")
_FALSEY = ("false", "0", "no", "off", "")


def env_name(key: str) -> str:
    """Return the prefixed environment variable name for a setting key."""
    return f"{ENV_PREFIX}{key.upper()}"


def get_env_str(key: str, default: Optional[str] = None) -> Optional[str]:
    """Get a prefixed environment variable as a string."""
    value = os.getenv(env_name(key))
    if value is None:
        return default
    return value


def get_env_bool(key: str, default: Optional[bool] = None) -> Optional[bool]:
    """Get a prefixed environment variable as a boolean.

    Truthy: true, 1, yes, on
    Falsey: false, 0, no, off, (empty string)
    """
    name = env_name(key)
    value = os.getenv(name)
    if value is None:
        return default

    val_lower = value.strip().lower()
    if val_lower in _TRUTHY:
        return True
    if val_lower in _FALSEY:
        return False

    raise ConfigurationError(
        f"Environment variable '{name}' must be a boolean, got '{value}'.", variable=name
    )
