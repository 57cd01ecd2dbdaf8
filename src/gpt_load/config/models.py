"""Typed configuration sections for the gpt-load service

Each section is a frozen pydantic model so that a published snapshot cannot
be mutated by the components reading it. Field defaults mirror the defaults
of the corresponding environment variables. Range checks live in
``gpt_load.config.validator``.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field

from .constants import DEFAULT_HOST, DEFAULT_PORT

_FROZEN = ConfigDict(frozen=True, extra="forbid")


class ServerConfig(BaseModel):
    """HTTP listener settings (all timeouts in seconds)"""

    model_config = _FROZEN

    is_master: bool = Field(default=True, description="False when IS_SLAVE is set")
    port: int = Field(default=int(DEFAULT_PORT), description="Listen port")
    host: str = Field(default=DEFAULT_HOST, description="Listen address")
    read_timeout: int = Field(default=60)
    write_timeout: int = Field(default=600)
    idle_timeout: int = Field(default=120)
    graceful_shutdown_timeout: int = Field(default=10)

    @computed_field
    @property
    def bind_address(self) -> str:
        """Get the full bind address"""
        return f"{self.host}:{self.port}"


class AuthConfig(BaseModel):
    """Shared secret protecting the management API and UI"""

    model_config = _FROZEN

    key: str = Field(default="", description="Value of AUTH_KEY")


class CORSConfig(BaseModel):
    model_config = _FROZEN

    enabled: bool = True
    allowed_origins: list[str] = Field(default_factory=lambda: ["*"])
    allowed_methods: list[str] = Field(
        default_factory=lambda: ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    )
    allowed_headers: list[str] = Field(default_factory=lambda: ["*"])
    allow_credentials: bool = False


class PerformanceConfig(BaseModel):
    model_config = _FROZEN

    max_concurrent_requests: int = 100


class LogConfig(BaseModel):
    """Settings consumed by ``gpt_load.logging_config.setup_logger``"""

    model_config = _FROZEN

    level: str = Field(default="info")
    format: str = Field(default="text", description="'text' or 'json'")
    enable_file: bool = Field(default=False)
    file_path: str = Field(default="./data/logs/app.log")


class DatabaseConfig(BaseModel):
    model_config = _FROZEN

    dsn: str = Field(
        default="./data/gpt-load.db",
        description="Database connection string; a path selects local SQLite",
    )


class AppConfig(BaseModel):
    """The complete configuration snapshot

    Built fresh by the loader on every reload and published by the manager
    only after it has passed validation.
    """

    model_config = _FROZEN

    server: ServerConfig = Field(default_factory=ServerConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)
    cors: CORSConfig = Field(default_factory=CORSConfig)
    performance: PerformanceConfig = Field(default_factory=PerformanceConfig)
    log: LogConfig = Field(default_factory=LogConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    redis_dsn: str = Field(default="", description="Empty selects the in-memory store")

    def get_masked_dict(self) -> dict[str, Any]:
        """Get configuration as dictionary with sensitive data masked

        This is safe for logging and printing as it masks the auth key and
        any connection strings, which may embed credentials.

        Returns:
            Configuration dictionary with sensitive fields masked
        """
        config_dict = self.model_dump()

        if config_dict["auth"]["key"]:
            config_dict["auth"]["key"] = "***MASKED***"
        if config_dict["database"]["dsn"]:
            config_dict["database"]["dsn"] = "***MASKED***"
        if config_dict["redis_dsn"]:
            config_dict["redis_dsn"] = "***MASKED***"

        return config_dict
