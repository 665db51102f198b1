"""
Test suite for DocumentPipeline.

Runs the whole write path with a mock HTTP transport, a fake parser and the
in-memory vector index.

System role: Verification of ingestion orchestration and dedup
"""

import asyncio
from pathlib import Path

import pytest

from docqa.boundary.vdb.memory_store import InMemoryVectorIndex
from docqa.core.content_addresser import hash_locator
from docqa.core.document_processing import DocumentPipeline
from docqa.core.exceptions import AcquisitionError, UnsupportedFormatError
from tests.conftest import DOC_URL


class TestIngestUrl:
    @pytest.mark.asyncio
    async def test_ingests_once_then_skips(
        self,
        document_pipeline: DocumentPipeline,
        vector_index: InMemoryVectorIndex,
        download_requests,
        mock_parser,
    ) -> None:
        # Act
        first = await document_pipeline.ingest_url(DOC_URL)
        second = await document_pipeline.ingest_url(DOC_URL)

        # Assert
        assert first.skipped is False
        assert first.chunk_count > 0
        assert first.content_hash == hash_locator(DOC_URL)
        assert len(vector_index) == first.chunk_count
        assert second.skipped is True
        assert len(download_requests) == 1
        assert mock_parser.parse.await_count == 1

    @pytest.mark.asyncio
    async def test_concurrent_requests_for_same_url_index_once(
        self, document_pipeline: DocumentPipeline, download_requests
    ) -> None:
        results = await asyncio.gather(*(document_pipeline.ingest_url(DOC_URL) for _ in range(3)))

        assert [result.skipped for result in results].count(False) == 1
        assert len(download_requests) == 1

    @pytest.mark.asyncio
    async def test_unsupported_format_downloads_nothing(
        self, document_pipeline: DocumentPipeline, download_requests
    ) -> None:
        with pytest.raises(UnsupportedFormatError):
            await document_pipeline.ingest_url("https://example.com/data.csv")

        assert download_requests == []

    @pytest.mark.asyncio
    async def test_parser_receives_detected_format(self, document_pipeline: DocumentPipeline, mock_parser) -> None:
        await document_pipeline.ingest_url("https://example.com/files/terms.DOCX")

        path, document_format = mock_parser.parse.await_args.args
        assert document_format == "docx"
        assert not Path(path).exists()

    @pytest.mark.asyncio
    async def test_failed_download_is_retried_on_next_request(
        self, document_pipeline: DocumentPipeline, mock_parser
    ) -> None:
        mock_parser.parse.side_effect = [AcquisitionError("corrupt"), mock_parser.parse.return_value]

        with pytest.raises(AcquisitionError):
            await document_pipeline.ingest_url(DOC_URL)
        result = await document_pipeline.ingest_url(DOC_URL)

        assert result.skipped is False
        assert document_pipeline.registry.is_processed(result.content_hash)


class TestIngestUpload:
    @pytest.mark.asyncio
    async def test_upload_indexed_and_removed(self, document_pipeline: DocumentPipeline, tmp_path: Path) -> None:
        # Arrange
        stored = tmp_path / "upload.tmp"
        stored.write_bytes(b"%PDF-1.4 uploaded")

        # Act
        result = await document_pipeline.ingest_upload(stored, "claims.pdf")

        # Assert
        assert result.locator.startswith("upload://")
        assert result.locator.endswith("/claims.pdf")
        assert result.chunk_count > 0
        assert not stored.exists()

    @pytest.mark.asyncio
    async def test_same_bytes_uploaded_twice_is_cache_hit(
        self, document_pipeline: DocumentPipeline, tmp_path: Path
    ) -> None:
        for name in ("a.tmp", "b.tmp"):
            (tmp_path / name).write_bytes(b"same bytes")

        first = await document_pipeline.ingest_upload(tmp_path / "a.tmp", "doc.pdf")
        second = await document_pipeline.ingest_upload(tmp_path / "b.tmp", "doc.pdf")

        assert first.skipped is False
        assert second.skipped is True
