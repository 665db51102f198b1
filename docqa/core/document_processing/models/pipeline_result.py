"""
Ingestion result model.

Represents the outcome of running a document through the write path.

Dependencies: pydantic
System role: Return type for DocumentPipeline ingestion
"""

from pydantic import BaseModel, Field


class IngestionResult(BaseModel):
    """Result of ingesting one document."""

    content_hash: str = Field(description="Content-hash of the document locator")
    locator: str = Field(description="Document URL or upload locator")
    chunk_count: int = Field(default=0, description="Number of chunks indexed")
    skipped: bool = Field(default=False, description="True when the hash was already indexed")
    processing_time_ms: float = Field(default=0.0, description="Total processing time in milliseconds")
