"""Configuration constants and environment defaults

All numeric limits used by the loader and the validator live in the single
``DEFAULT_CONSTANTS`` value. Every other recognized environment variable's
default is declared on the section models in ``gpt_load.config.models``.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ConfigConstants:
    """Limits and fallbacks applied to the configuration"""

    min_port: int = 1
    max_port: int = 65535
    min_timeout: int = 1
    default_timeout: int = 30
    default_max_sockets: int = 50
    default_max_free_sockets: int = 10
    min_graceful_shutdown_timeout: int = 10
    min_concurrent_requests: int = 1


DEFAULT_CONSTANTS = ConfigConstants()

DEFAULT_ENV_FILE = ".env"

# Values offered by the interactive bootstrapper and applied when no
# settings file exists.
DEFAULT_PORT = "3001"
DEFAULT_HOST = "0.0.0.0"
DEFAULT_AUTH_KEY = "sk-123456"

REQUIRED_DEFAULTS: dict[str, str] = {
    "PORT": DEFAULT_PORT,
    "HOST": DEFAULT_HOST,
    "AUTH_KEY": DEFAULT_AUTH_KEY,
}
