"""Centralized logging configuration for the security system."""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)-25s | %(message)s"

_HANDLER_NAME = "catpoint-console"


def configure_logging(level: str = "INFO", stream: Optional[TextIO] = None) -> logging.Logger:
    """
    Configure the ``catpoint`` logger hierarchy.

    Safe to call more than once: the console handler is replaced, not
    duplicated.

    Parameters
    ----------
    level
        Level name (DEBUG, INFO, WARNING, ...).
    stream
        Output stream; defaults to stderr.

    Returns
    -------
    logging.Logger
        The configured ``catpoint`` root logger.

    Raises
    ------
    ValueError
        If ``level`` is not a known level name.
    """
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level: {level!r}")

    root = logging.getLogger("catpoint")
    root.setLevel(numeric)

    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    return root
