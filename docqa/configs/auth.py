"""
Shared-secret authentication settings.

Dependencies: pydantic, pydantic_settings
System role: Bearer token configuration for the Q&A endpoint
"""

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class AuthSettings(BaseSettings):
    """Bearer token configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    team_token: SecretStr = Field(
        default=SecretStr(""),
        description="Shared secret expected as 'Authorization: Bearer <token>'",
    )
    auth_required: bool = Field(
        default=True,
        description="Reject requests without a matching bearer token",
    )
