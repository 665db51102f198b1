"""
Vector database schemas.

Pydantic models for vector operations (records, metadata, matches) and the
async interface every vector index adapter implements.

Dependencies: pydantic
System role: Type definitions for vector operations
"""

from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field


class RecordMetadata(BaseModel):
    """
    Metadata stored alongside each vector.

    The chunk text is stored here so retrieval can return passages without a
    second lookup.
    """

    text: str = Field(description="Original chunk text")
    position: int = Field(description="Chunk sequence number within the document")
    content_hash: str = Field(description="Content-hash of the source locator")
    page: int | None = Field(default=None, description="Page number in source document")
    source: str = Field(default="", description="Source URL or upload locator")


class IndexRecord(BaseModel):
    """Embedding vector plus retrievable metadata for one chunk."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Deterministic record identifier")
    vector: list[float] = Field(description="Embedding vector")
    metadata: RecordMetadata


class VectorMatch(BaseModel):
    """Single result from a similarity query."""

    id: str = Field(description="Record identifier")
    score: float = Field(description="Similarity score (higher is closer)")
    metadata: RecordMetadata | None = Field(default=None, description="Stored metadata")


class VectorIndex(Protocol):
    """Async interface for an external vector index."""

    async def upsert(self, records: list[IndexRecord]) -> None:
        """Insert or overwrite records by id."""
        ...

    async def query(
        self,
        vector: list[float],
        top_k: int,
        include_metadata: bool = True,
        content_hash: str | None = None,
    ) -> list[VectorMatch]:
        """Return up to top_k nearest records, closest first, optionally from one document."""
        ...
