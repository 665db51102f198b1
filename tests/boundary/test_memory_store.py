"""
Test suite for the FAISS-backed development index and the index factory.

System role: Verification of the development vector store
"""

import pytest

from docqa.boundary.vdb import InMemoryVectorIndex, get_vector_index
from docqa.boundary.vdb.vector_schemas import IndexRecord, RecordMetadata
from docqa.configs.vector_store import VectorStoreSettings


def _record(record_id: str, vector: list[float], text: str = "t", content_hash: str = "h") -> IndexRecord:
    return IndexRecord(
        id=record_id,
        vector=vector,
        metadata=RecordMetadata(text=text, position=0, content_hash=content_hash),
    )


class TestInMemoryVectorIndex:
    @pytest.mark.asyncio
    async def test_query_ranks_by_cosine(self) -> None:
        # Arrange
        index = InMemoryVectorIndex()
        await index.upsert([
            _record("far", [0.0, 1.0]),
            _record("near", [1.0, 0.1]),
            _record("mid", [1.0, 1.0]),
        ])

        # Act
        matches = await index.query([1.0, 0.0], top_k=2)

        # Assert
        assert [m.id for m in matches] == ["near", "mid"]
        assert matches[0].score > matches[1].score

    @pytest.mark.asyncio
    async def test_upsert_overwrites_by_id(self) -> None:
        index = InMemoryVectorIndex()
        await index.upsert([_record("a", [1.0, 0.0], text="old")])
        await index.upsert([_record("a", [1.0, 0.0], text="new")])

        matches = await index.query([1.0, 0.0], top_k=5)

        assert len(index) == 1
        assert matches[0].metadata.text == "new"

    @pytest.mark.asyncio
    async def test_query_filtered_by_content_hash(self) -> None:
        index = InMemoryVectorIndex()
        await index.upsert([
            _record("a-0", [1.0, 0.0], content_hash="a"),
            _record("b-0", [1.0, 0.1], content_hash="b"),
            _record("b-1", [0.0, 1.0], content_hash="b"),
        ])

        matches = await index.query([1.0, 0.0], top_k=5, content_hash="b")

        assert [m.id for m in matches] == ["b-0", "b-1"]

    @pytest.mark.asyncio
    async def test_empty_index_returns_nothing(self) -> None:
        assert await InMemoryVectorIndex().query([1.0, 0.0], top_k=3) == []

    @pytest.mark.asyncio
    async def test_get_and_clear(self) -> None:
        index = InMemoryVectorIndex()
        await index.upsert([_record("a", [1.0, 0.0], text="stored")])

        assert index.get("a").text == "stored"
        assert index.get("missing") is None

        index.clear()

        assert len(index) == 0
        assert index.get("a") is None

    @pytest.mark.asyncio
    async def test_metadata_omitted_on_request(self) -> None:
        index = InMemoryVectorIndex()
        await index.upsert([_record("a", [1.0, 0.0])])

        matches = await index.query([1.0, 0.0], top_k=1, include_metadata=False)

        assert matches[0].metadata is None

    @pytest.mark.asyncio
    async def test_zero_vector_scores_zero(self) -> None:
        index = InMemoryVectorIndex()
        await index.upsert([_record("a", [0.0, 0.0])])

        matches = await index.query([1.0, 0.0], top_k=1)

        assert matches[0].score == 0.0


class TestVectorIndexFactory:
    def test_memory_is_default(self) -> None:
        index = get_vector_index(VectorStoreSettings(store_type="memory", index_name="docs"))

        assert isinstance(index, InMemoryVectorIndex)
        assert index.index_name == "docs"

    def test_unknown_type_rejected(self) -> None:
        with pytest.raises(ValueError, match="Invalid VECTOR_STORE_STORE_TYPE"):
            get_vector_index(VectorStoreSettings(store_type="pinecone"))
