"""Environment variable loaders for configuration."""

from __future__ import annotations

import os

from .errors import InvalidConfigurationError

_TRUTHY = frozenset({"1", "true", "yes", "on"})
_FALSY = frozenset({"0", "false", "no", "off"})


def optional_env_var(name: str) -> str | None:
    """Return a stripped environment variable, treating blank values as unset."""

    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def env_flag(name: str, *, default: bool = False) -> bool:
    value = optional_env_var(name)
    if value is None:
        return default
    lowered = value.lower()
    if lowered in _TRUTHY:
        return True
    if lowered in _FALSY:
        return False
    raise InvalidConfigurationError(name, value, expected="a boolean flag")


def env_positive_float(name: str) -> float | None:
    value = optional_env_var(name)
    if value is None:
        return None
    try:
        parsed = float(value)
    except ValueError:
        raise InvalidConfigurationError(name, value, expected="a number") from None
    if parsed <= 0:
        raise InvalidConfigurationError(name, value, expected="a positive number")
    return parsed
