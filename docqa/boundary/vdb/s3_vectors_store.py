"""
S3 Vectors index for production retrieval.

Stores precomputed embeddings in an Amazon S3 Vectors index and queries them
by similarity. Embedding happens upstream, so this adapter only moves vectors
and metadata.

Dependencies: boto3, fastapi.concurrency
System role: Production vector store (S3 Vectors)
"""

import logging
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from fastapi.concurrency import run_in_threadpool

from docqa.boundary.vdb.vector_schemas import IndexRecord, RecordMetadata, VectorMatch
from docqa.core.exceptions import VectorStoreError

logger = logging.getLogger(__name__)


class S3VectorsIndex:
    """
    S3 Vectors client implementing the VectorIndex interface.

    boto3 calls are blocking, so each one runs in the threadpool.
    """

    def __init__(
        self,
        vectors_bucket: str,
        index_name: str = "documents",
        region: str = "us-east-1",
        client: Any | None = None,
    ) -> None:
        """
        Initialize S3 Vectors index.

        Args:
            vectors_bucket: S3 Vectors bucket name
            index_name: Index name within the bucket
            region: AWS region for S3 Vectors
            client: Preconfigured boto3 client (tests)

        Raises:
            ValueError: When vectors_bucket or index_name is empty
        """
        if not vectors_bucket:
            raise ValueError("vectors_bucket cannot be empty")
        if not index_name:
            raise ValueError("index_name cannot be empty")

        self.vectors_bucket = vectors_bucket
        self.index_name = index_name
        self._client = client or boto3.client("s3vectors", region_name=region)

    def _put(self, entries: list[dict[str, Any]]) -> None:
        self._client.put_vectors(
            vectorBucketName=self.vectors_bucket,
            indexName=self.index_name,
            vectors=entries,
        )

    def _query(
        self,
        vector: list[float],
        top_k: int,
        include_metadata: bool,
        content_hash: str | None,
    ) -> dict[str, Any]:
        kwargs: dict[str, Any] = {
            "vectorBucketName": self.vectors_bucket,
            "indexName": self.index_name,
            "queryVector": {"float32": vector},
            "topK": top_k,
            "returnMetadata": include_metadata,
            "returnDistance": True,
        }
        if content_hash:
            kwargs["filter"] = {"content_hash": content_hash}
        return self._client.query_vectors(**kwargs)

    async def upsert(self, records: list[IndexRecord]) -> None:
        """
        Upsert records into the S3 Vectors index.

        Record ids are deterministic, so re-upserting overwrites in place.

        Args:
            records: Vectors with metadata

        Raises:
            VectorStoreError: If the put operation fails
        """
        entries = [
            {
                "key": record.id,
                "data": {"float32": record.vector},
                "metadata": record.metadata.model_dump(mode="json", exclude_none=True),
            }
            for record in records
        ]
        try:
            await run_in_threadpool(self._put, entries)
        except (ClientError, BotoCoreError) as e:
            raise VectorStoreError(
                message="Failed to upsert vectors to S3 Vectors",
                operation="upsert",
                details={"error": str(e), "vector_count": len(records)},
            ) from e

        logger.info(
            f"{__name__}:upsert - Uploaded {len(records)} vectors",
            extra={"bucket": self.vectors_bucket, "index": self.index_name},
        )

    async def query(
        self,
        vector: list[float],
        top_k: int,
        include_metadata: bool = True,
        content_hash: str | None = None,
    ) -> list[VectorMatch]:
        """
        Query nearest vectors.

        S3 Vectors reports a distance; the score is 1 - distance so higher
        means closer.

        Args:
            vector: Query embedding
            top_k: Maximum matches to return
            include_metadata: Return stored metadata with each match
            content_hash: Restrict matches to one document via a metadata filter

        Returns:
            list[VectorMatch]: Matches, closest first

        Raises:
            VectorStoreError: If the query operation fails
        """
        try:
            response = await run_in_threadpool(self._query, vector, top_k, include_metadata, content_hash)
        except (ClientError, BotoCoreError) as e:
            raise VectorStoreError(
                message="Failed to query vectors from S3 Vectors",
                operation="query",
                details={"error": str(e), "top_k": top_k},
            ) from e

        matches = []
        for item in response.get("vectors", []):
            metadata = item.get("metadata")
            matches.append(
                VectorMatch(
                    id=item["key"],
                    score=1.0 - float(item.get("distance", 0.0)),
                    metadata=RecordMetadata(**metadata) if metadata else None,
                )
            )
        return matches
