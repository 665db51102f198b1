"""
LLM and embedding configuration settings.

Google Gemini chat model and embedding model used by the Q&A pipeline.
The API key is accepted under the LLM_ prefix or the bare GOOGLE_API_KEY /
GEMINI_API_KEY variables.

Dependencies: pydantic, pydantic_settings
System role: Model client configuration
"""

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class LLMSettings(BaseSettings):
    """Gemini chat and embedding configuration."""

    model_config = SettingsConfigDict(
        env_prefix="LLM_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    google_api_key: SecretStr = Field(
        default=SecretStr(""),
        validation_alias=AliasChoices("LLM_GOOGLE_API_KEY", "GOOGLE_API_KEY", "GEMINI_API_KEY"),
        description="Google Generative AI API key",
    )
    chat_model: str = Field(
        default="gemini-2.0-flash",
        description="Gemini model used for rewriting and answer synthesis",
    )
    temperature: float = Field(
        default=0.0,
        ge=0.0,
        le=2.0,
        description="Sampling temperature for the chat model",
    )
    embedding_model: str = Field(
        default="models/text-embedding-004",
        description="Gemini embedding model ID",
    )
    timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        description="Deadline for a single LLM or embedding call",
    )
