"""Logging setup for cligen runs."""

from __future__ import annotations

import logging
import os

LOG_LEVEL_ENV_VAR = "CLIGEN_LOG_LEVEL"
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

_LEVEL_NAMES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def get_log_level_from_env(default: int = logging.WARNING) -> int:
    """Level named by ``CLIGEN_LOG_LEVEL``, or ``default`` if unset or unknown."""
    name = os.getenv(LOG_LEVEL_ENV_VAR, "").strip().upper()
    if name not in _LEVEL_NAMES:
        return default
    return getattr(logging, name)


def configure_logging(
    verbose: bool = False,
    debug: bool = False,
    level: int | None = None,
    respect_env: bool = True,
) -> None:
    """Route generator logs to stderr.

    An explicit ``level`` beats ``debug``, which beats ``verbose``; without
    any of them the environment variable decides, then WARNING.
    """
    if level is None:
        if debug:
            level = logging.DEBUG
        elif verbose:
            level = logging.INFO
        elif respect_env:
            level = get_log_level_from_env()
        else:
            level = logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)


__all__ = ["LOG_LEVEL_ENV_VAR", "configure_logging", "get_log_level_from_env"]
