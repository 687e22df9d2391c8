"""Logging configuration for devtimeline with custom verbosity levels."""

from __future__ import annotations

import logging
import sys
from typing import Any, TextIO

# Between INFO (20) and WARNING (30): task starts, assignments, completions
CHANGES_LEVEL = 25
# Between DEBUG (10) and INFO (20): why a task was skipped on a given day
CHECKS_LEVEL = 15

logging.addLevelName(CHANGES_LEVEL, "CHANGES")
logging.addLevelName(CHECKS_LEVEL, "CHECKS")

VERBOSITY_SILENT = 0
VERBOSITY_CHANGES = 1
VERBOSITY_CHECKS = 2
VERBOSITY_DEBUG = 3

_LEVELS = {
    VERBOSITY_SILENT: logging.ERROR,
    VERBOSITY_CHANGES: CHANGES_LEVEL,
    VERBOSITY_CHECKS: CHECKS_LEVEL,
    VERBOSITY_DEBUG: logging.DEBUG,
}


class TimelineLogger(logging.Logger):
    """Logger with semantic verbosity methods.

    - changes(): verbosity 1, schedule mutations
    - checks(): verbosity 2, per-day readiness and availability decisions
    - debug(): verbosity 3, progress arithmetic and calendar lookups
    """

    def changes(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log a schedule change (verbosity level 1)."""
        if self.isEnabledFor(CHANGES_LEVEL):
            self._log(CHANGES_LEVEL, msg, args, **kwargs)

    def checks(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log a scheduling check (verbosity level 2)."""
        if self.isEnabledFor(CHECKS_LEVEL):
            self._log(CHECKS_LEVEL, msg, args, **kwargs)


def get_logger() -> TimelineLogger:
    """Get the devtimeline logger instance (singleton)."""
    logging.setLoggerClass(TimelineLogger)
    logger = logging.getLogger("devtimeline")
    assert isinstance(logger, TimelineLogger)
    return logger


def setup_logger(verbosity: int, stream: TextIO | None = None) -> None:
    """Configure the devtimeline logger.

    Can be called repeatedly; existing handlers are replaced.

    Args:
        verbosity: 0=errors only, 1=changes, 2=checks, 3=debug
        stream: Output stream (defaults to sys.stderr)
    """
    logger = get_logger()
    logger.handlers.clear()
    logger.setLevel(_LEVELS.get(verbosity, logging.ERROR))

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.propagate = False


def reset_logger() -> None:
    """Reset the logger to its default quiet state (used by tests)."""
    logger = get_logger()
    logger.handlers.clear()
    logger.setLevel(logging.ERROR)


def debug_enabled() -> bool:
    """Return True if debug-level output (verbosity 3) is enabled."""
    return get_logger().isEnabledFor(logging.DEBUG)
