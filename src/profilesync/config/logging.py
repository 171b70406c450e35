"""Shared logging helpers."""

from __future__ import annotations

import logging

from .env import optional_env_var
from .errors import InvalidConfigurationError


def configure_logging(*, level: int | None = None, force: bool = False) -> None:
    """Initialise the root logger once with sensible defaults.

    Parameters mirror ``logging.basicConfig`` with a simplified contract. When
    ``level`` is omitted it is read from ``PROFILESYNC_LOG_LEVEL`` and falls back
    to INFO. Pass ``force=True`` to reconfigure during tests or specialised entry
    points.
    """

    logging.basicConfig(
        level=level if level is not None else get_log_level(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )


def get_log_level() -> int:
    name = optional_env_var("PROFILESYNC_LOG_LEVEL")
    if name is None:
        return logging.INFO
    level = logging.getLevelNamesMapping().get(name.upper())
    if level is None:
        raise InvalidConfigurationError("PROFILESYNC_LOG_LEVEL", name, expected="a logging level")
    return level
