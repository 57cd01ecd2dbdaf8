"""Environment loader

Seeds the environment from the settings file, then reads every recognized
variable through the primitive parsers into an ``AppConfig``. Every field
has a default, so building the aggregate cannot fail; rule checks happen
afterwards in ``gpt_load.config.validator``.
"""

import os
from collections.abc import MutableMapping
from pathlib import Path

from dotenv import dotenv_values

from ..logging_base import get_logger
from .bootstrapper import BootstrapOutcome
from .constants import DEFAULT_ENV_FILE, REQUIRED_DEFAULTS
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

logger = get_logger(__name__)


def load_settings_file(
    path: str | Path, environ: MutableMapping[str, str] | None = None
) -> bool:
    """Load a dotenv file into the environment without overriding

    Variables already present in ``environ`` keep their value. A missing or
    unreadable file is logged and otherwise ignored.

    Returns:
        True if the file was read
    """
    if environ is None:
        environ = os.environ
    settings_path = Path(path)

    if not settings_path.is_file():
        logger.debug(f"Settings file {settings_path} not found")
        return False

    try:
        values = dotenv_values(settings_path, encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Failed to load settings file {settings_path}: {e}")
        return False

    for key, value in values.items():
        if value is None or key in environ:
            continue
        environ[key] = value

    logger.debug(f"Loaded {len(values)} entries from {settings_path}")
    return True


def apply_required_defaults(environ: MutableMapping[str, str] | None = None) -> None:
    """Default PORT, HOST and AUTH_KEY where they are unset or empty"""
    if environ is None:
        environ = os.environ
    for key, value in REQUIRED_DEFAULTS.items():
        if not environ.get(key):
            environ[key] = value


def build_config(environ: MutableMapping[str, str] | None = None) -> AppConfig:
    """Read the recognized variables into a fresh configuration aggregate"""
    if environ is None:
        environ = os.environ
    defaults = AppConfig()

    def env(key: str) -> str:
        return environ.get(key, "")

    server = ServerConfig(
        is_master=not parse_boolean(env("IS_SLAVE"), False),
        port=parse_integer(env("PORT"), defaults.server.port),
        host=get_env_or_default("HOST", defaults.server.host, environ),
        read_timeout=parse_integer(
            env("SERVER_READ_TIMEOUT"), defaults.server.read_timeout
        ),
        write_timeout=parse_integer(
            env("SERVER_WRITE_TIMEOUT"), defaults.server.write_timeout
        ),
        idle_timeout=parse_integer(
            env("SERVER_IDLE_TIMEOUT"), defaults.server.idle_timeout
        ),
        graceful_shutdown_timeout=parse_integer(
            env("SERVER_GRACEFUL_SHUTDOWN_TIMEOUT"),
            defaults.server.graceful_shutdown_timeout,
        ),
    )

    cors = CORSConfig(
        enabled=parse_boolean(env("ENABLE_CORS"), defaults.cors.enabled),
        allowed_origins=parse_array(
            env("ALLOWED_ORIGINS"), defaults.cors.allowed_origins
        ),
        allowed_methods=parse_array(
            env("ALLOWED_METHODS"), defaults.cors.allowed_methods
        ),
        allowed_headers=parse_array(
            env("ALLOWED_HEADERS"), defaults.cors.allowed_headers
        ),
        allow_credentials=parse_boolean(
            env("ALLOW_CREDENTIALS"), defaults.cors.allow_credentials
        ),
    )

    log = LogConfig(
        level=get_env_or_default("LOG_LEVEL", defaults.log.level, environ),
        format=get_env_or_default("LOG_FORMAT", defaults.log.format, environ),
        enable_file=parse_boolean(env("LOG_ENABLE_FILE"), defaults.log.enable_file),
        file_path=get_env_or_default("LOG_FILE_PATH", defaults.log.file_path, environ),
    )

    return AppConfig(
        server=server,
        auth=AuthConfig(key=env("AUTH_KEY")),
        cors=cors,
        performance=PerformanceConfig(
            max_concurrent_requests=parse_integer(
                env("MAX_CONCURRENT_REQUESTS"),
                defaults.performance.max_concurrent_requests,
            )
        ),
        log=log,
        database=DatabaseConfig(
            dsn=get_env_or_default("DATABASE_DSN", defaults.database.dsn, environ)
        ),
        redis_dsn=env("REDIS_DSN"),
    )


class EnvironmentLoader:
    """Turns a bootstrap outcome and the environment into an ``AppConfig``"""

    def __init__(
        self,
        env_file: str | Path = DEFAULT_ENV_FILE,
        environ: MutableMapping[str, str] | None = None,
    ):
        self.env_file = Path(env_file)
        self.environ = environ if environ is not None else os.environ

    def load(self, outcome: BootstrapOutcome) -> AppConfig:
        """Seed the environment and build the aggregate

        Args:
            outcome: Result of the bootstrap pass for this reload

        Returns:
            A new, not yet validated configuration aggregate
        """
        loaded = False
        if outcome.file_present:
            loaded = load_settings_file(self.env_file, self.environ)

        # An unreadable file is treated like a missing one.
        if not loaded:
            apply_required_defaults(self.environ)

        return build_config(self.environ)
