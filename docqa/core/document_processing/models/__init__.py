"""
Models for document processing pipeline.

Exports: Chunk, DocumentSource, LocalArtifact, IngestionResult
"""

from .chunk import Chunk, DocumentFormat, DocumentSource, LocalArtifact
from .pipeline_result import IngestionResult

__all__ = [
    "Chunk",
    "DocumentFormat",
    "DocumentSource",
    "IngestionResult",
    "LocalArtifact",
]
