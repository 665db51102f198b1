"""
Indexing task.

Embeds chunks and upserts them, with their text as metadata, into the vector
index. Batches run concurrently up to a fixed cap. A content-hash already in
the ingestion registry is skipped without any embedding or upsert call.

Dependencies: asyncio, docqa.boundary
System role: Final stage of document ingestion pipeline
"""

import asyncio
import logging

from docqa.boundary.llm.embeddings import EmbeddingService
from docqa.boundary.vdb.vector_schemas import IndexRecord, RecordMetadata, VectorIndex
from docqa.core.document_processing.models import Chunk
from docqa.core.exceptions import IndexingError
from docqa.core.ingestion_registry import IngestionRegistry

logger = logging.getLogger(__name__)


def record_id(content_hash: str, position: int) -> str:
    """Deterministic record id: 16-char hash prefix plus chunk position."""
    return f"{content_hash[:16]}-{position}"


class IndexingTask:
    """Embed and upsert chunks with bounded concurrency."""

    def __init__(
        self,
        embeddings: EmbeddingService,
        vector_index: VectorIndex,
        registry: IngestionRegistry,
        batch_size: int = 100,
        max_concurrency: int = 5,
        upsert_timeout_seconds: float = 30.0,
    ) -> None:
        """
        Initialize indexing task.

        Args:
            embeddings: Embedding service for chunk texts
            vector_index: Target vector index
            registry: Processed content-hash registry
            batch_size: Chunks per embed+upsert batch
            max_concurrency: Maximum batches in flight
            upsert_timeout_seconds: Deadline for one upsert call
        """
        self._embeddings = embeddings
        self._vector_index = vector_index
        self._registry = registry
        self._batch_size = batch_size
        self._max_concurrency = max_concurrency
        self._upsert_timeout = upsert_timeout_seconds

    async def _index_batch(
        self,
        batch: list[Chunk],
        source: str,
        semaphore: asyncio.Semaphore,
    ) -> int:
        async with semaphore:
            vectors = await self._embeddings.embed_documents([chunk.text for chunk in batch])
            records = [
                IndexRecord(
                    id=record_id(chunk.content_hash, chunk.position),
                    vector=vector,
                    metadata=RecordMetadata(
                        text=chunk.text,
                        position=chunk.position,
                        content_hash=chunk.content_hash,
                        page=chunk.page,
                        source=source,
                    ),
                )
                for chunk, vector in zip(batch, vectors)
            ]
            await asyncio.wait_for(self._vector_index.upsert(records), timeout=self._upsert_timeout)
            return len(records)

    async def index(self, chunks: list[Chunk], content_hash: str, source: str = "") -> int:
        """
        Embed and upsert chunks for one document.

        Already-committed batches are not rolled back when a later batch
        fails.

        Args:
            chunks: Chunks of the document
            content_hash: Content-hash of the document locator
            source: Locator stored in record metadata

        Returns:
            int: Number of records upserted (0 when skipped)

        Raises:
            IndexingError: When any embedding or upsert call fails or times out
        """
        if self._registry.is_processed(content_hash):
            logger.info(
                f"{__name__}:index - Skipping already indexed document",
                extra={"content_hash": content_hash[:12]},
            )
            return 0

        semaphore = asyncio.Semaphore(self._max_concurrency)
        batches = [
            chunks[i : i + self._batch_size] for i in range(0, len(chunks), self._batch_size)
        ]
        tasks = [
            asyncio.create_task(self._index_batch(batch, source, semaphore)) for batch in batches
        ]

        try:
            counts = await asyncio.gather(*tasks)
        except Exception as e:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            logger.error(
                f"{__name__}:index - {type(e).__name__}: {e}",
                extra={"content_hash": content_hash[:12], "batches": len(batches)},
            )
            raise IndexingError(
                f"Failed to index document: {type(e).__name__}",
                source or None,
                {"error": str(e), "chunk_count": len(chunks)},
            ) from e

        self._registry.mark_processed(content_hash)
        total = sum(counts)
        logger.info(
            f"{__name__}:index - Indexed {total} chunks in {len(batches)} batches",
            extra={"content_hash": content_hash[:12]},
        )
        return total
