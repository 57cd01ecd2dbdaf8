"""Configuration manager facade

The manager owns the current configuration snapshot. ``reload_config`` runs
bootstrapper, loader and validator, and publishes the new snapshot only once
it has validated, so a failed reload leaves the previous snapshot in place.
Accessors hand out deep copies, so callers can never mutate the snapshot.
"""

import threading
from collections.abc import MutableMapping
from pathlib import Path

from ..exceptions import ConfigurationError
from ..logging_base import SilentMode, get_logger
from ..protocols import ConfigurationProvider, LineConsole
from .bootstrapper import SettingsBootstrapper
from .constants import DEFAULT_CONSTANTS, DEFAULT_ENV_FILE, ConfigConstants
from .loader import EnvironmentLoader
from .models import (
    AppConfig,
    AuthConfig,
    CORSConfig,
    DatabaseConfig,
    LogConfig,
    PerformanceConfig,
    ServerConfig,
)
from .validator import ConfigValidator

logger = get_logger(__name__)


class ConfigManager(ConfigurationProvider):
    """Builds, validates and serves the configuration snapshot

    Usage:
        manager = ConfigManager()
        server = manager.get_effective_server_config()
        print(server.host, server.port)

    Args:
        env_file: Path of the dotenv settings file
        console: Console used by the first-run bootstrapper
        silent_mode: Silent-mode switch shared with the logging configurator
        environ: Environment mapping to read and seed (defaults to os.environ)
        interactive: Whether a missing settings file may be created
            interactively
        constants: Limits used by the validator
        load: Perform the initial reload immediately

    Raises:
        ConfigValidationError: If the initial load fails validation
    """

    def __init__(
        self,
        env_file: str | Path = DEFAULT_ENV_FILE,
        *,
        console: LineConsole | None = None,
        silent_mode: SilentMode | None = None,
        environ: MutableMapping[str, str] | None = None,
        interactive: bool = True,
        constants: ConfigConstants = DEFAULT_CONSTANTS,
        load: bool = True,
    ):
        self.env_file = Path(env_file)
        self.silent_mode = silent_mode if silent_mode is not None else SilentMode()
        self.bootstrapper = SettingsBootstrapper(
            self.env_file,
            console=console,
            silent_mode=self.silent_mode,
            interactive=interactive,
        )
        self.loader = EnvironmentLoader(self.env_file, environ)
        self.validator = ConfigValidator(constants)

        self._config: AppConfig | None = None
        self._lock = threading.RLock()

        if load:
            self.reload_config()

    def reload_config(self) -> AppConfig:
        """Reload the configuration from the settings file and environment

        Returns:
            A copy of the newly published snapshot

        Raises:
            ConfigValidationError: If the new configuration is invalid; the
                previous snapshot stays active
        """
        outcome = self.bootstrapper.run()
        candidate = self.loader.load(outcome)
        validated = self.validator.validate(candidate)

        with self._lock:
            self._config = validated

        logger.debug("Configuration snapshot published")
        return validated.model_copy(deep=True)

    def validate(self) -> None:
        """Re-check the current snapshot, republishing any correction

        Raises:
            ConfigValidationError: If the snapshot violates a rule
        """
        with self._lock:
            current = self._current()
            validated = self.validator.validate(current)
            if validated is not current:
                self._config = validated

    def _current(self) -> AppConfig:
        config = self._config
        if config is None:
            raise ConfigurationError("Configuration has not been loaded")
        return config

    @property
    def snapshot(self) -> AppConfig:
        """A copy of the complete current snapshot"""
        return self._current().model_copy(deep=True)

    def is_master(self) -> bool:
        return self._current().server.is_master

    def get_auth_config(self) -> AuthConfig:
        return self._current().auth.model_copy(deep=True)

    def get_cors_config(self) -> CORSConfig:
        return self._current().cors.model_copy(deep=True)

    def get_performance_config(self) -> PerformanceConfig:
        return self._current().performance.model_copy(deep=True)

    def get_log_config(self) -> LogConfig:
        return self._current().log.model_copy(deep=True)

    def get_redis_dsn(self) -> str:
        return self._current().redis_dsn

    def get_database_config(self) -> DatabaseConfig:
        return self._current().database.model_copy(deep=True)

    def get_effective_server_config(self) -> ServerConfig:
        """Server settings used to bind the listener and report its address"""
        return self._current().server.model_copy(deep=True)

    def display_server_config(self) -> None:
        """Log a summary of the server-related configuration

        The auth key and connection strings are never printed, only whether
        they are configured.
        """
        config = self._current()
        server = config.server
        cors = config.cors
        log = config.log

        logger.info("")
        logger.info("======= Server Configuration =======")
        logger.info("  --- Server ---")
        logger.info(f"    Listen Address: {server.host}:{server.port}")
        logger.info(
            f"    Graceful Shutdown Timeout: {server.graceful_shutdown_timeout} seconds"
        )
        logger.info(f"    Read Timeout: {server.read_timeout} seconds")
        logger.info(f"    Write Timeout: {server.write_timeout} seconds")
        logger.info(f"    Idle Timeout: {server.idle_timeout} seconds")
        logger.info(f"    Mode: {'master' if server.is_master else 'slave'}")

        logger.info("  --- Performance ---")
        logger.info(
            f"    Max Concurrent Requests: {config.performance.max_concurrent_requests}"
        )

        logger.info("  --- Security ---")
        logger.info("    Authentication: enabled (key loaded)")
        if cors.enabled:
            cors_status = f"enabled (Origins: {', '.join(cors.allowed_origins)})"
        else:
            cors_status = "disabled"
        logger.info(f"    CORS: {cors_status}")

        logger.info("  --- Logging ---")
        logger.info(f"    Log Level: {log.level}")
        logger.info(f"    Log Format: {log.format}")
        logger.info(f"    File Logging: {str(log.enable_file).lower()}")
        if log.enable_file:
            logger.info(f"    Log File Path: {log.file_path}")

        logger.info("  --- Dependencies ---")
        if config.database.dsn:
            logger.info("    Database: configured")
        else:
            logger.info("    Database: not configured")
        if config.redis_dsn:
            logger.info("    Redis: configured")
        else:
            logger.info("    Redis: not configured")
        logger.info("====================================")
        logger.info("")
