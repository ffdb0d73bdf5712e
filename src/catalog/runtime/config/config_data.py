"""Pydantic models describing the application configuration.

The flat environment variables from :class:`EnvironmentVariables` are grouped
here into the sections the rest of the application consumes.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, computed_field
from sqlalchemy.engine import URL

from src.catalog.runtime.config.settings import EnvironmentVariables

LOG_LEVELS = {
    "DEBUG": "DEBUG",
    "INFO": "INFO",
    "WARN": "WARNING",
    "WARNING": "WARNING",
    "ERROR": "ERROR",
}


def normalize_log_level(value: str | None) -> str:
    """Map LOG_LEVEL values onto loguru level names, defaulting to INFO."""
    if not value:
        return "INFO"
    return LOG_LEVELS.get(value.strip().upper(), "INFO")


class AppConfig(BaseModel):
    """General application settings."""

    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Deployment environment"
    )
    request_timeout_seconds: float = Field(
        default=15.0, description="Deadline applied to every repository call"
    )


class ServerConfig(BaseModel):
    """HTTP server settings."""

    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=8080, description="Listening port")
    keep_alive_seconds: int = Field(default=60, description="Idle keep-alive timeout")
    graceful_shutdown_seconds: int = Field(
        default=30, description="Drain window before connections are force-closed"
    )


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = Field(default="INFO", description="Logging level")
    format: Literal["json", "plain"] = Field(default="json", description="Log format")


class DatabaseConfig(BaseModel):
    """Database configuration model."""

    host: str = Field(default="", description="Database host; empty disables the database")
    port: int = Field(default=5432, description="Database port")
    name: str = Field(default="", description="Database name")
    user: str = Field(default="", description="Database username")
    password: str = Field(default="", description="Database password")
    pool_mode: str = Field(default="", description="Pooler mode hint (e.g. transaction)")
    url: str | None = Field(
        default=None, description="Explicit SQLAlchemy URL overriding the host fields"
    )
    pool_size: int = Field(default=10, description="Connection pool size")
    max_overflow: int = Field(default=5, description="Maximum pool overflow")
    pool_timeout: int = Field(default=30, description="Seconds to wait for a connection")
    pool_recycle: int = Field(default=1800, description="Connection recycle interval")
    connect_timeout: int = Field(default=5, description="Seconds allowed to connect")

    @computed_field
    @property
    def enabled(self) -> bool:
        """A relational backend is used only when a host or explicit URL is set."""
        return bool(self.host or self.url)

    @computed_field
    @property
    def connection_string(self) -> str:
        """SQLAlchemy connection string for the configured database."""
        if self.url:
            return self.url
        query = {"application_name": "catalog-api"}
        url = URL.create(
            "postgresql+psycopg2",
            username=self.user or None,
            password=self.password or None,
            host=self.host,
            port=self.port,
            database=self.name or None,
            query=query,
        )
        return url.render_as_string(hide_password=False)


class ConfigData(BaseModel):
    """Complete application configuration."""

    app: AppConfig = Field(default_factory=AppConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)


def load_config(env: EnvironmentVariables | None = None) -> ConfigData:
    """Build the configuration from environment variables (and ``.env``)."""
    env = env or EnvironmentVariables()
    return ConfigData(
        app=AppConfig(
            environment=env.environment,
            request_timeout_seconds=env.request_timeout_seconds,
        ),
        server=ServerConfig(port=env.port),
        logging=LoggingConfig(
            level=normalize_log_level(env.log_level),
            format="plain" if env.environment == "development" else "json",
        ),
        database=DatabaseConfig(
            host=env.db_host,
            port=env.db_port,
            name=env.db_name,
            user=env.db_user,
            password=env.db_password,
            pool_mode=env.db_poolmode,
        ),
    )
