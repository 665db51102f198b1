"""
Configuration settings for the document Q&A pipeline.

Chunking, indexing concurrency, acquisition limits, retrieval retry policy
and conversation behaviour.

Dependencies: pydantic, pydantic_settings
System role: Centralized pipeline configuration
"""

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PipelineSettings(BaseSettings):
    """Settings for ingestion and question answering."""

    model_config = SettingsConfigDict(
        env_prefix="DOC_PIPELINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Chunking settings
    chunk_size: int = Field(default=1000, gt=0, description="Window size in characters")
    chunk_overlap: int = Field(
        default=200,
        ge=0,
        description="Characters shared by consecutive chunks",
    )

    # Indexing settings
    upsert_batch_size: int = Field(
        default=100,
        gt=0,
        description="Chunks embedded and upserted per call",
    )
    max_concurrency: int = Field(
        default=5,
        gt=0,
        description="Maximum simultaneous embed+upsert batches",
    )

    # Acquisition settings
    allowed_extensions: list[str] = Field(
        default=[".pdf", ".docx"],
        description="Document extensions accepted for ingestion",
    )
    download_timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        description="Deadline for downloading a remote document",
    )
    max_download_bytes: int = Field(
        default=50 * 1024 * 1024,
        gt=0,
        description="Maximum accepted document size",
    )

    # Retrieval retry policy
    retrieval_max_attempts: int = Field(
        default=2,
        ge=1,
        description="Total attempts for a vector index query",
    )
    retrieval_backoff_ms: int = Field(
        default=500,
        ge=0,
        description="Fixed delay between query attempts",
    )

    # Conversation settings
    rewrite_fallback_to_original: bool = Field(
        default=True,
        description="Use the raw question when query rewriting fails",
    )
    history_max_turns: int = Field(
        default=20,
        gt=0,
        description="Turns kept per conversation session",
    )

    @model_validator(mode="after")
    def _check_overlap(self) -> "PipelineSettings":
        if self.chunk_overlap >= self.chunk_size:
            raise ValueError(
                f"chunk_overlap ({self.chunk_overlap}) must be smaller than "
                f"chunk_size ({self.chunk_size})"
            )
        return self
