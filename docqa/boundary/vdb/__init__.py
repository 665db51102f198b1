"""
Vector database boundary layer.

Provides vector index adapters for storage and retrieval operations.
- InMemoryVectorIndex: Local development index
- S3VectorsIndex: Production S3 Vectors client (boto3)

Dependencies: boto3
System role: Vector store adapter for RAG retrieval
"""

from docqa.boundary.vdb.memory_store import InMemoryVectorIndex
from docqa.boundary.vdb.vector_schemas import (
    IndexRecord,
    RecordMetadata,
    VectorIndex,
    VectorMatch,
)
from docqa.boundary.vdb.vector_store_factory import get_vector_index

__all__ = [
    "IndexRecord",
    "InMemoryVectorIndex",
    "RecordMetadata",
    "VectorIndex",
    "VectorMatch",
    "get_vector_index",
]
