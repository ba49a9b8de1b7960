"""Logging helpers for orger.

Library modules only ever call :func:`get_logger`; nothing is printed unless
the application (or the ``orger`` CLI via ``--verbose``) configures a handler.

Example:
    >>> from orger.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Reconstructing list of %d items", 3)
"""

from __future__ import annotations

import logging
import os

LOG_FORMAT = "%(levelname)s | %(name)s | %(message)s"

# Read when configure_logging() is called without an explicit level
LOG_LEVEL_ENV = "ORGER_LOG_LEVEL"


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the ``orger`` namespace.

    Args:
        name: Logger name (typically __name__)

    Example:
        >>> get_logger("mymodule").name
        'orger.mymodule'
    """
    if not (name == "orger" or name.startswith("orger.")):
        name = f"orger.{name}"
    return logging.getLogger(name)


def _level_from_env() -> int:
    """Level named by ``ORGER_LOG_LEVEL``, WARNING when unset or invalid."""
    level = getattr(logging, os.getenv(LOG_LEVEL_ENV, "WARNING").upper(), None)
    if not isinstance(level, int):
        return logging.WARNING
    return level


def configure_logging(level: int | None = None) -> logging.Logger:
    """Send ``orger.*`` records to stderr.

    Calling it again only changes the level; a second handler is never added.

    Args:
        level: Logging level (defaults to ``ORGER_LOG_LEVEL``, else WARNING)

    Returns:
        The package root logger
    """
    root = get_logger("orger")
    root.setLevel(level if level is not None else _level_from_env())
    if not any(getattr(handler, "_orger", False) for handler in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._orger = True  # type: ignore[attr-defined]
        root.addHandler(handler)
    return root
