"""
Basic logging utilities without dependencies to avoid circular imports.

This module provides the core get_logger function and the silent-mode switch,
both of which can be safely imported throughout the codebase, including the
config package that the full logging configuration itself depends on.
"""

import logging
from contextlib import contextmanager
from typing import Iterator


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for the given name.

    Loggers are plain stdlib loggers propagating to the root logger;
    handlers are installed by ``gpt_load.logging_config.setup_logger`` once
    the log settings are known.

    Args:
        name: Name of the logger (typically __name__)

    Returns:
        logging.Logger: Logger instance
    """
    return logging.getLogger(name)


class SilentMode:
    """Process-wide switch that suppresses console log output

    Passed explicitly to the bootstrapper and to ``setup_logger`` instead of
    being stored in the process environment.
    """

    def __init__(self, enabled: bool = False):
        self.enabled = enabled

    @contextmanager
    def engaged(self) -> Iterator["SilentMode"]:
        """Enable silent mode for the duration of the block, then restore"""
        previous = self.enabled
        self.enabled = True
        try:
            yield self
        finally:
            self.enabled = previous

    def __repr__(self) -> str:
        return f"SilentMode(enabled={self.enabled})"


class SilentModeFilter(logging.Filter):
    """Drops records on the console handler while silent mode is engaged"""

    def __init__(self, silent_mode: SilentMode):
        super().__init__()
        self.silent_mode = silent_mode

    def filter(self, record: logging.LogRecord) -> bool:
        return not self.silent_mode.enabled
