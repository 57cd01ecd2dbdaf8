"""
Protocol interfaces for gpt-load

This module defines the abstract interfaces that decouple the configuration
core from its collaborators: the console the bootstrapper talks through, the
accessor surface other components read configuration from, and the HTTP
application the service bootstrap starts and stops.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .config.models import (
        AuthConfig,
        CORSConfig,
        DatabaseConfig,
        LogConfig,
        PerformanceConfig,
        ServerConfig,
    )


class LineConsole(ABC):
    """Line-oriented input/output used for operator prompts"""

    @abstractmethod
    def read_line(self) -> str:
        """Read one line without its trailing newline; end of input reads as ''"""
        pass

    @abstractmethod
    def write(self, text: str) -> None:
        """Write text as-is (no newline is appended)"""
        pass


class ConfigurationProvider(ABC):
    """Read-only configuration surface consumed by the rest of the service"""

    @abstractmethod
    def get_effective_server_config(self) -> "ServerConfig":
        """Get server configuration used to bind the listener"""
        pass

    @abstractmethod
    def get_auth_config(self) -> "AuthConfig":
        """Get authentication configuration"""
        pass

    @abstractmethod
    def get_cors_config(self) -> "CORSConfig":
        """Get CORS configuration"""
        pass

    @abstractmethod
    def get_performance_config(self) -> "PerformanceConfig":
        """Get performance configuration"""
        pass

    @abstractmethod
    def get_log_config(self) -> "LogConfig":
        """Get logging configuration"""
        pass

    @abstractmethod
    def get_database_config(self) -> "DatabaseConfig":
        """Get database configuration"""
        pass

    @abstractmethod
    def get_redis_dsn(self) -> str:
        """Get the Redis DSN; empty selects the in-memory store"""
        pass

    @abstractmethod
    def is_master(self) -> bool:
        """Whether this node runs as master"""
        pass

    @abstractmethod
    def reload_config(self):
        """Rebuild, validate and publish a new snapshot"""
        pass

    @abstractmethod
    def validate(self):
        """Re-check the current snapshot"""
        pass


class ServiceApp(ABC):
    """HTTP application driven by the service bootstrap"""

    @abstractmethod
    def start(self) -> None:
        """Bind the listener and start serving; raise on failure"""
        pass

    @abstractmethod
    def stop(self, timeout: float) -> None:
        """Shut down gracefully within ``timeout`` seconds"""
        pass
