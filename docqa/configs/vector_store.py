"""
Vector store configuration settings.

Selects the vector index adapter (in-memory for local dev, S3 Vectors for
deployment) and its connection parameters.

Dependencies: pydantic, pydantic_settings
System role: Vector database configuration for RAG retrieval
"""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class VectorStoreSettings(BaseSettings):
    """Vector index configuration (memory for dev, S3 Vectors for prod)."""

    model_config = SettingsConfigDict(
        env_prefix="VECTOR_STORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    store_type: str = Field(
        default="memory",
        description="Vector store type: 'memory' for local dev, 's3' for production",
    )
    index_name: str = Field(
        default="documents",
        validation_alias=AliasChoices("VECTOR_STORE_INDEX_NAME", "PINECONE_INDEX_NAME"),
        description="Vector index name",
    )
    vectors_bucket: str = Field(
        default="docqa-vectors",
        description="S3 Vectors bucket name",
    )
    aws_region: str = Field(default="us-east-1", description="AWS region for S3 Vectors")

    top_k: int = Field(default=10, ge=1, le=100, description="Number of passages to retrieve")
    timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Deadline for a single upsert or query call",
    )
