"""Logging setup for recentfiles.

Thin wrapper over stdlib logging. Diagnostics go to stderr so that stdout stays
reserved for command output.
"""

from __future__ import annotations

import logging
from typing import TextIO

_LOGGER_NAME = "recentfiles"

__all__ = ["configure_logging", "get_logger"]


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the package logger, or a child of it for a module `__name__`."""
    if name is None or name == _LOGGER_NAME:
        return logging.getLogger(_LOGGER_NAME)
    if not name.startswith(_LOGGER_NAME + "."):
        name = f"{_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logging(verbosity: int = 0, *, stream: TextIO | None = None) -> None:
    """
    Install a single stderr handler on the package logger.

    Verbosity 0 shows warnings and errors, 1 adds info, 2 or more adds debug.
    Safe to call repeatedly: earlier handlers are replaced.
    """
    logger = get_logger()
    if verbosity <= 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG
    logger.setLevel(level)

    for h in list(logger.handlers):
        logger.removeHandler(h)

    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
