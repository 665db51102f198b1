"""
Passage retriever.

Embeds the query once, then queries the vector index for the nearest chunks.
Index queries are retried under a bounded RetryPolicy; the query embedding is
not retried.

Dependencies: docqa.boundary, docqa.core.retry_policy
System role: Second stage of the read path
"""

import asyncio
import logging

from docqa.boundary.llm.embeddings import EmbeddingService
from docqa.boundary.vdb.vector_schemas import VectorIndex, VectorMatch
from docqa.core.exceptions import RetrievalError
from docqa.core.rag_query.schemas import RetrievedPassage
from docqa.core.retry_policy import RetryPolicy

logger = logging.getLogger(__name__)


class Retriever:
    """Embed-then-query retrieval with bounded retries."""

    def __init__(
        self,
        embeddings: EmbeddingService,
        vector_index: VectorIndex,
        retry_policy: RetryPolicy | None = None,
        top_k: int = 10,
        query_timeout_seconds: float = 30.0,
    ) -> None:
        """
        Initialize retriever.

        Args:
            embeddings: Embedding service for the query text
            vector_index: Vector index to search
            retry_policy: Attempt bound and backoff for index queries
            top_k: Default number of passages
            query_timeout_seconds: Deadline for a single index query
        """
        self._embeddings = embeddings
        self._vector_index = vector_index
        self._retry_policy = retry_policy or RetryPolicy()
        self._top_k = top_k
        self._query_timeout = query_timeout_seconds

    async def _query_with_retry(
        self, vector: list[float], top_k: int, content_hash: str | None
    ) -> list[VectorMatch]:
        attempts = 0
        try:
            async for attempt in self._retry_policy.retrying("query"):
                with attempt:
                    attempts += 1
                    return await asyncio.wait_for(
                        self._vector_index.query(
                            vector, top_k=top_k, include_metadata=True, content_hash=content_hash
                        ),
                        timeout=self._query_timeout,
                    )
        except Exception as e:
            raise RetrievalError(
                f"Vector index query failed after {attempts} attempts",
                attempts=attempts,
                details={"error": str(e), "error_type": type(e).__name__},
            ) from e
        return []

    async def retrieve(
        self,
        query: str,
        top_k: int | None = None,
        content_hash: str | None = None,
    ) -> list[RetrievedPassage]:
        """
        Retrieve the passages most similar to a query.

        Args:
            query: Question or rewritten query
            top_k: Override for the number of passages
            content_hash: Restrict passages to one document; None searches the whole index

        Returns:
            list[RetrievedPassage]: Passages ranked 1..n, closest first

        Raises:
            RetrievalError: Embedding failed, or every query attempt failed
        """
        k = top_k or self._top_k
        try:
            vector = await self._embeddings.embed_query(query)
        except Exception as e:
            raise RetrievalError(
                "Failed to embed query",
                attempts=0,
                details={"error": str(e), "error_type": type(e).__name__},
            ) from e

        matches = await self._query_with_retry(vector, k, content_hash)
        passages = [
            RetrievedPassage(
                rank=rank,
                text=match.metadata.text,
                score=match.score,
                page=match.metadata.page,
            )
            for rank, match in enumerate(
                (m for m in matches if m.metadata is not None and m.metadata.text), start=1
            )
        ]
        logger.info(
            f"{__name__}:retrieve - Found {len(passages)} passages",
            extra={"top_k": k},
        )
        return passages
