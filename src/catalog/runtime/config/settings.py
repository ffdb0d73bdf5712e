from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EnvironmentVariables(BaseSettings):
    """Simple primitive values loaded from environment variables and .env files."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
    )

    # Server
    port: int = Field(default=8080)
    environment: Literal["development", "production", "test"] = Field(
        default="development"
    )
    log_level: str = Field(default="INFO")
    request_timeout_seconds: float = Field(default=15.0)

    # Database (an empty DB_HOST selects the in-memory repositories)
    db_host: str = Field(default="")
    db_port: int = Field(default=5432)
    db_name: str = Field(default="")
    db_user: str = Field(default="")
    db_password: str = Field(default="")
    db_poolmode: str = Field(default="")
