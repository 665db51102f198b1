"""
Vector index factory selecting between in-memory (dev) and S3 Vectors (prod).

Depends on VECTOR_STORE_STORE_TYPE environment variable.

Dependencies: docqa.boundary.vdb, docqa.configs
System role: Vector index instantiation and selection
"""

import logging

from docqa.boundary.vdb.memory_store import InMemoryVectorIndex
from docqa.boundary.vdb.vector_schemas import VectorIndex
from docqa.configs.vector_store import VectorStoreSettings

logger = logging.getLogger(__name__)


def get_vector_index(settings: VectorStoreSettings) -> VectorIndex:
    """
    Build the vector index configured by settings.

    Args:
        settings: Vector store settings

    Returns:
        VectorIndex: InMemoryVectorIndex or S3VectorsIndex

    Raises:
        ValueError: If store_type is invalid
    """
    store_type = settings.store_type.lower()

    if store_type == "memory":
        logger.info(f"{__name__}:get_vector_index - Creating in-memory index (local dev mode)")
        return InMemoryVectorIndex(index_name=settings.index_name)

    if store_type == "s3":
        from docqa.boundary.vdb.s3_vectors_store import S3VectorsIndex

        logger.info(f"{__name__}:get_vector_index - Creating S3 Vectors index (production mode)")
        return S3VectorsIndex(
            vectors_bucket=settings.vectors_bucket,
            index_name=settings.index_name,
            region=settings.aws_region,
        )

    raise ValueError(
        f"Invalid VECTOR_STORE_STORE_TYPE: {store_type}. "
        f"Must be 'memory' (dev) or 's3' (production)."
    )
