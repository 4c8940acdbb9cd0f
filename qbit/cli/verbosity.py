"""Verbosity handling for the qbit CLI.

Repeated ``-v`` flags raise the log level and, at ``-vv``, attach tracebacks
to logged command errors.
"""

from __future__ import annotations

import logging
from enum import IntEnum


class VerbosityLevel(IntEnum):
    """Verbosity levels for CLI commands."""

    NORMAL = 0  # warnings and errors
    VERBOSE = 1  # -v: progress info
    DEBUG = 2  # -vv: debug messages and tracebacks


class VerbosityManager:
    """Maps the ``-v`` count of a command line to logging behaviour."""

    LEVEL_TO_LOGGING: dict[VerbosityLevel, int] = {
        VerbosityLevel.NORMAL: logging.WARNING,
        VerbosityLevel.VERBOSE: logging.INFO,
        VerbosityLevel.DEBUG: logging.DEBUG,
    }

    def __init__(self, verbosity_count: int = 0):
        self.level = VerbosityLevel(max(0, min(2, verbosity_count)))

    @classmethod
    def from_count(cls, count: int) -> VerbosityManager:
        """Create a manager from the number of ``-v`` flags."""
        return cls(count)

    def get_logging_level(self) -> int:
        return self.LEVEL_TO_LOGGING[self.level]

    def should_show_stack_trace(self) -> bool:
        """Whether logged command errors carry their traceback."""
        return self.level == VerbosityLevel.DEBUG
