"""
Process-level settings shared by the aggregated Settings class.

Covers the deployment environment (which decides whether services are built
eagerly at startup) and the root log level.

Dependencies: pydantic, pydantic_settings
System role: Foundation for the unified Settings class
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class BaseSettings(PydanticBaseSettings):
    """Environment and logging settings read from unprefixed variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: Literal["development", "test", "production"] = Field(
        default="development",
        description="Deployment environment; 'test' skips service pre-warming at startup",
    )
    log_level: LogLevel = Field(default="INFO", description="Root log level")

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value
