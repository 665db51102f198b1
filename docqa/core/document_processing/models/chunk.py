"""
Domain models for the ingestion pipeline.

DocumentSource identifies what is being ingested, LocalArtifact is the
transient local copy, and Chunk is one window of document text.

Dependencies: pydantic
System role: Data structures for the document ingestion pipeline
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

DocumentFormat = Literal["pdf", "docx"]


class DocumentSource(BaseModel):
    """A document to ingest, identified by its locator."""

    model_config = ConfigDict(frozen=True)

    locator: str = Field(description="Document URL or upload://<sha256>/<filename>")
    format: DocumentFormat = Field(description="Detected document format")
    content_hash: str = Field(description="SHA-256 of the locator")


class LocalArtifact(BaseModel):
    """Transient local copy of a document, removed when acquisition ends."""

    model_config = ConfigDict(frozen=True)

    path: Path = Field(description="Local file path")
    temp_dir: Path | None = Field(
        default=None,
        description="Directory owning the file, removed with it",
    )


class Chunk(BaseModel):
    """Contiguous window of document text."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(description="Chunk text content")
    content_hash: str = Field(description="Content-hash of the source document")
    position: int = Field(ge=0, description="Sequence index across the whole document")
    page: int | None = Field(default=None, description="Page number in source document")
    start_index: int = Field(default=0, ge=0, description="Offset of the chunk in its page text")
