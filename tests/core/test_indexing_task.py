"""
Test suite for IndexingTask.

Tests idempotent ingestion per content-hash, batching under the concurrency
cap, record layout, and failure handling.

System role: Verification of the embed+upsert stage
"""

import asyncio
from unittest.mock import AsyncMock

import pytest

from docqa.boundary.llm.embeddings import EmbeddingService
from docqa.boundary.vdb.memory_store import InMemoryVectorIndex
from docqa.core.document_processing.models import Chunk
from docqa.core.document_processing.tasks.indexing_task import IndexingTask, record_id
from docqa.core.exceptions import IndexingError
from docqa.core.ingestion_registry import IngestionRegistry

HASH = "a" * 64


def _chunks(count: int) -> list[Chunk]:
    return [
        Chunk(text=f"chunk number {i}", content_hash=HASH, position=i, page=i // 10)
        for i in range(count)
    ]


class TrackingIndex(InMemoryVectorIndex):
    """In-memory index recording peak concurrent upserts."""

    def __init__(self) -> None:
        super().__init__()
        self.in_flight = 0
        self.peak = 0
        self.upsert_calls = 0

    async def upsert(self, records) -> None:
        self.upsert_calls += 1
        self.in_flight += 1
        self.peak = max(self.peak, self.in_flight)
        await asyncio.sleep(0.005)
        self.in_flight -= 1
        await super().upsert(records)


class TestIndexingTask:
    @pytest.mark.asyncio
    async def test_indexes_and_marks_processed(
        self, embedding_service: EmbeddingService, registry: IngestionRegistry
    ) -> None:
        # Arrange
        index = InMemoryVectorIndex()
        task = IndexingTask(embedding_service, index, registry, batch_size=4)

        # Act
        count = await task.index(_chunks(10), HASH, source="https://x.com/a.pdf")

        # Assert
        assert count == 10
        assert len(index) == 10
        assert registry.is_processed(HASH)
        metadata = index.get(record_id(HASH, 3))
        assert metadata.text == "chunk number 3"
        assert metadata.position == 3
        assert metadata.source == "https://x.com/a.pdf"

    @pytest.mark.asyncio
    async def test_second_call_for_same_hash_does_nothing(
        self, embedding_service: EmbeddingService, fake_embeddings, registry: IngestionRegistry
    ) -> None:
        index = TrackingIndex()
        task = IndexingTask(embedding_service, index, registry, batch_size=100)

        await task.index(_chunks(5), HASH)
        embed_calls = len(fake_embeddings.document_calls)
        upserts = index.upsert_calls

        assert await task.index(_chunks(5), HASH) == 0
        assert len(fake_embeddings.document_calls) == embed_calls
        assert index.upsert_calls == upserts

    @pytest.mark.asyncio
    async def test_concurrency_is_capped(
        self, embedding_service: EmbeddingService, registry: IngestionRegistry
    ) -> None:
        index = TrackingIndex()
        task = IndexingTask(embedding_service, index, registry, batch_size=1, max_concurrency=5)

        await task.index(_chunks(20), HASH)

        assert index.upsert_calls == 20
        assert 1 < index.peak <= 5

    @pytest.mark.asyncio
    async def test_upsert_failure_raises_and_leaves_hash_unmarked(
        self, embedding_service: EmbeddingService, registry: IngestionRegistry
    ) -> None:
        # Arrange
        index = InMemoryVectorIndex()
        index.upsert = AsyncMock(side_effect=RuntimeError("rate limited"))
        task = IndexingTask(embedding_service, index, registry, batch_size=2)

        # Act
        with pytest.raises(IndexingError) as exc_info:
            await task.index(_chunks(6), HASH, source="https://x.com/a.pdf")

        # Assert
        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert not registry.is_processed(HASH)

    @pytest.mark.asyncio
    async def test_embedding_failure_raises(self, registry: IngestionRegistry) -> None:
        embeddings = AsyncMock(spec=EmbeddingService)
        embeddings.embed_documents.side_effect = TimeoutError()
        task = IndexingTask(embeddings, InMemoryVectorIndex(), registry)

        with pytest.raises(IndexingError):
            await task.index(_chunks(3), HASH)

    def test_record_ids_are_deterministic(self) -> None:
        assert record_id(HASH, 7) == f"{HASH[:16]}-7"
