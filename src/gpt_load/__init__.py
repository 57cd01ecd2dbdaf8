"""gpt-load service configuration core

Provides the configuration manager that builds and validates the service's
configuration snapshot, the logging sink configurator that consumes it, and
the bootstrap that runs an HTTP application with that configuration.
"""

from .bootstrap import display_address, run_service
from .config import AppConfig, ConfigManager
from .exceptions import (
    ConfigurationError,
    ConfigValidationError,
    GptLoadError,
    SettingsFileError,
    ValidationError,
)
from .logging_base import SilentMode, get_logger
from .logging_config import setup_logger

__version__ = "1.0.0"

__all__ = [
    "AppConfig",
    "ConfigManager",
    "ConfigValidationError",
    "ConfigurationError",
    "GptLoadError",
    "SettingsFileError",
    "SilentMode",
    "ValidationError",
    "display_address",
    "get_logger",
    "run_service",
    "setup_logger",
]
