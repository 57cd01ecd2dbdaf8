"""
Logging sink configuration for gpt-load

This module turns the ``log`` section of the configuration snapshot into
handlers on the root logger. Console output can be suppressed through an
explicit ``SilentMode`` object, which the interactive bootstrapper engages
while it talks to the operator so prompts are not interleaved with log lines.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, TextIO

from .config.models import LogConfig
from .logging_base import SilentMode, SilentModeFilter, get_logger

# Level names accepted in LOG_LEVEL; aliases follow the logrus vocabulary
# operators already use in existing settings files.
_LEVELS = {
    "trace": logging.DEBUG,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "fatal": logging.CRITICAL,
    "critical": logging.CRITICAL,
    "panic": logging.CRITICAL,
}

TEXT_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

# Marks handlers installed here so a later call can replace them.
_MANAGED_ATTR = "_gpt_load_managed"


class TextLogFormatter(logging.Formatter):
    """Human-readable formatter with full timestamps"""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
            datefmt=TEXT_TIMESTAMP_FORMAT,
        )


class JSONLogFormatter(logging.Formatter):
    """JSON log formatter for structured logging in production"""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as structured JSON"""
        timestamp = datetime.fromtimestamp(record.created, tz=timezone.utc)
        log_entry = {
            "time": timestamp.isoformat(timespec="milliseconds"),
            "level": record.levelname.lower(),
            "logger": record.name,
            "msg": record.getMessage(),
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str, ensure_ascii=False)


def parse_log_level(level: str) -> int:
    """Map a LOG_LEVEL value to a logging level, defaulting to INFO"""
    return _LEVELS.get((level or "").strip().lower(), logging.INFO)


def create_formatter(log_format: str) -> logging.Formatter:
    """Create the formatter for the configured LOG_FORMAT"""
    if (log_format or "").strip().lower() == "json":
        return JSONLogFormatter()
    return TextLogFormatter()


def _open_file_handler(file_path: str) -> logging.FileHandler:
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    return logging.FileHandler(path, mode="a", encoding="utf-8")


def _install(target: logging.Logger, handlers: list[logging.Handler]) -> None:
    for handler in target.handlers[:]:
        if getattr(handler, _MANAGED_ATTR, False):
            target.removeHandler(handler)
            handler.close()
    for handler in handlers:
        setattr(handler, _MANAGED_ATTR, True)
        target.addHandler(handler)


def setup_logger(
    log_config: LogConfig,
    silent_mode: Optional[SilentMode] = None,
    *,
    console_stream: Optional[TextIO] = None,
    logger: Optional[logging.Logger] = None,
) -> logging.Logger:
    """Configure log level, format and sinks from the log settings

    Sink selection:
      - silent: file only when file logging is enabled, otherwise discarded
      - not silent: console and file when file logging is enabled,
        console only otherwise

    A log file that cannot be opened never aborts startup. When not silent a
    warning is logged and the console sink is kept; when silent the handlers
    already installed are left as they are.

    Args:
        log_config: The ``log`` section of the configuration snapshot
        silent_mode: Silent-mode switch; a fresh, disabled one if omitted
        console_stream: Console stream (defaults to stdout)
        logger: Logger to configure (defaults to the root logger)

    Returns:
        The configured logger
    """
    if silent_mode is None:
        silent_mode = SilentMode()
    target = logger if logger is not None else logging.getLogger()
    level = parse_log_level(log_config.level)
    formatter = create_formatter(log_config.format)
    target.setLevel(level)

    file_handler: Optional[logging.FileHandler] = None
    file_error: Optional[OSError] = None
    if log_config.enable_file:
        try:
            file_handler = _open_file_handler(log_config.file_path)
            file_handler.setFormatter(formatter)
        except OSError as e:
            file_error = e

    if silent_mode.enabled:
        if file_error is not None:
            return target
        if file_handler is not None:
            _install(target, [file_handler])
        else:
            _install(target, [logging.NullHandler()])
        return target

    console_handler = logging.StreamHandler(
        console_stream if console_stream is not None else sys.stdout
    )
    console_handler.setFormatter(formatter)
    console_handler.addFilter(SilentModeFilter(silent_mode))

    handlers: list[logging.Handler] = [console_handler]
    if file_handler is not None:
        handlers.append(file_handler)
    _install(target, handlers)

    if file_error is not None:
        get_logger(__name__).warning(
            f"Failed to open log file {log_config.file_path}: {file_error}"
        )

    return target
