"""
HTTP server settings.

Dependencies: pydantic, pydantic_settings
System role: Listen address and optional routes
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerSettings(BaseSettings):
    """Uvicorn listen address and route toggles."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = Field(default="0.0.0.0", description="Listen host")
    port: int = Field(default=8000, description="Listen port")
    upload_enabled: bool = Field(
        default=True,
        description="Expose the GET/POST /upload document form",
    )
