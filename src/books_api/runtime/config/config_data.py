"""Pydantic models for parsing the config.yaml configuration file.

This module contains Pydantic models that correspond to the structure of config.yaml.
These models handle validation and type conversion of the YAML configuration data.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, computed_field

# libpq accepts both spellings, SQLAlchemy only the long one
_POSTGRES_SCHEME_ALIASES = ("postgres://",)


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = Field(default="INFO", description="Logging level")
    format: Literal["json", "plain"] = Field(default="plain", description="Log format")
    file: str | None = Field(default=None, description="Log file path")
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )


class DatabaseConfig(BaseModel):
    """Database configuration model."""

    url: str = Field(default="", description="Database connection URL")

    @computed_field
    @property
    def connection_string(self) -> str:
        """Connection URL in the form SQLAlchemy expects."""
        for alias in _POSTGRES_SCHEME_ALIASES:
            if self.url.startswith(alias):
                return "postgresql://" + self.url[len(alias) :]
        return self.url

    @property
    def backend(self) -> str:
        """Short backend name used in log lines."""
        scheme = self.connection_string.split(":", 1)[0]
        return scheme.split("+", 1)[0] or "unknown"


class AppConfig(BaseModel):
    """Application configuration model."""

    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Application environment"
    )
    host: str = Field(default="0.0.0.0", description="Application host")
    port: int = Field(default=3000, description="Application port")
    shutdown_grace_seconds: int = Field(
        default=10,
        description="Time in-flight requests get to finish once shutdown starts",
    )


class ConfigData(BaseModel):
    """Root configuration model that matches the config.yaml structure."""

    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
    database: DatabaseConfig = Field(
        default_factory=DatabaseConfig, description="Database configuration"
    )
    app: AppConfig = Field(
        default_factory=AppConfig, description="Application configuration"
    )
