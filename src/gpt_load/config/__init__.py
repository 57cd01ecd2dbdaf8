"""Configuration system for gpt-load

Assembles a validated, typed configuration snapshot from environment
variables, optionally seeded from a dotenv settings file that can be
generated interactively on first run.

Usage:
    from gpt_load.config import ConfigManager

    manager = ConfigManager()
    server = manager.get_effective_server_config()
    max_requests = manager.get_performance_config().max_concurrent_requests
"""

from ..exceptions import ConfigurationError, ConfigValidationError
from .bootstrapper import (
    BootstrapOutcome,
    BootstrapState,
    SettingsBootstrapper,
    StdioConsole,
)
from .constants import DEFAULT_CONSTANTS, DEFAULT_ENV_FILE, ConfigConstants
from .loader import EnvironmentLoader, build_config, load_settings_file
from .manager import ConfigManager
from .models import (
    AppConfig,
    AuthConfig,
    CORSConfig,
    DatabaseConfig,
    LogConfig,
    PerformanceConfig,
    ServerConfig,
)
from .parsers import get_env_or_default, parse_array, parse_boolean, parse_integer
from .validator import ConfigValidator

__all__ = [
    "AppConfig",
    "AuthConfig",
    "BootstrapOutcome",
    "BootstrapState",
    "CORSConfig",
    "ConfigConstants",
    "ConfigManager",
    "ConfigValidationError",
    "ConfigValidator",
    "ConfigurationError",
    "DEFAULT_CONSTANTS",
    "DEFAULT_ENV_FILE",
    "DatabaseConfig",
    "EnvironmentLoader",
    "LogConfig",
    "PerformanceConfig",
    "ServerConfig",
    "SettingsBootstrapper",
    "StdioConsole",
    "build_config",
    "get_env_or_default",
    "load_settings_file",
    "parse_array",
    "parse_boolean",
    "parse_integer",
]
