"""
Document processing pipeline.

Acquire -> parse -> chunk -> embed+upsert for remote URLs and uploads.
"""

from .entrypoint import DocumentPipeline
from .models import Chunk, DocumentSource, IngestionResult, LocalArtifact

__all__ = [
    "Chunk",
    "DocumentPipeline",
    "DocumentSource",
    "IngestionResult",
    "LocalArtifact",
]
