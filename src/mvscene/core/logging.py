"""Logging setup for mvscene.

Records go to stderr so that tables printed by the CLI on stdout stay clean.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_level(level: str | int) -> int:
    """Map a level name ("debug", "INFO", ...) or number to a logging level."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def setup_logging(level: str | int = "INFO", stream: TextIO | None = None) -> logging.Logger:
    """Attach a single formatted handler to the ``mvscene`` logger.

    Calling it again replaces the handler, so the level can be changed per
    CLI invocation without duplicating output.
    """
    logger = logging.getLogger("mvscene")
    logger.setLevel(resolve_level(level))
    for handler in list(logger.handlers):
        if getattr(handler, "_mvscene", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    handler._mvscene = True
    logger.addHandler(handler)
    return logger
