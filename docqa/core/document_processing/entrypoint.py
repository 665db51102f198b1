"""
Document pipeline orchestrator.

Coordinates acquisition, parsing, chunking and indexing tasks for remote URLs
and uploaded files. The ingestion registry is claimed first, so a document
already indexed in this process is never downloaded again.

Dependencies: All task modules, docqa.core.ingestion_registry
System role: Write-path orchestration (coordinates only)
"""

import logging
import time
from pathlib import Path

from fastapi.concurrency import run_in_threadpool

from docqa.boundary.llm.embeddings import EmbeddingService
from docqa.boundary.vdb.vector_schemas import VectorIndex
from docqa.configs.pipeline import PipelineSettings
from docqa.core.content_addresser import hash_locator, upload_locator
from docqa.core.document_processing.models import (
    DocumentSource,
    IngestionResult,
    LocalArtifact,
)
from docqa.core.document_processing.tasks import (
    AcquisitionTask,
    ChunkingTask,
    IndexingTask,
    ParsingTask,
)
from docqa.core.ingestion_registry import IngestionRegistry

logger = logging.getLogger(__name__)


class DocumentPipeline:
    """Orchestrate document ingestion: acquire -> parse -> chunk -> embed+upsert."""

    def __init__(
        self,
        embeddings: EmbeddingService,
        vector_index: VectorIndex,
        registry: IngestionRegistry,
        settings: PipelineSettings | None = None,
        acquisition_task: AcquisitionTask | None = None,
        parsing_task: ParsingTask | None = None,
        upsert_timeout_seconds: float = 30.0,
    ) -> None:
        """
        Initialize pipeline with its collaborators.

        Args:
            embeddings: Embedding service used by the indexer
            vector_index: Target vector index
            registry: Processed content-hash registry
            settings: Pipeline settings (uses defaults if None)
            acquisition_task: Override for the acquirer (tests)
            parsing_task: Override for the parser (tests)
            upsert_timeout_seconds: Deadline for one upsert call
        """
        self._settings = settings or PipelineSettings()
        self._registry = registry

        self._acquisition_task = acquisition_task or AcquisitionTask(
            timeout_seconds=self._settings.download_timeout_seconds,
            max_bytes=self._settings.max_download_bytes,
            allowed_extensions=self._settings.allowed_extensions,
        )
        self._parsing_task = parsing_task or ParsingTask()
        self._chunking_task = ChunkingTask(
            chunk_size=self._settings.chunk_size,
            chunk_overlap=self._settings.chunk_overlap,
        )
        self._indexing_task = IndexingTask(
            embeddings=embeddings,
            vector_index=vector_index,
            registry=registry,
            batch_size=self._settings.upsert_batch_size,
            max_concurrency=self._settings.max_concurrency,
            upsert_timeout_seconds=upsert_timeout_seconds,
        )

    @property
    def registry(self) -> IngestionRegistry:
        return self._registry

    async def _process(self, artifact: LocalArtifact, source: DocumentSource) -> int:
        documents = await self._parsing_task.parse(artifact.path, source.format)
        chunks = self._chunking_task.chunk(documents, source.content_hash)
        return await self._indexing_task.index(chunks, source.content_hash, source=source.locator)

    async def ingest_url(self, url: str) -> IngestionResult:
        """
        Ingest a remote document, skipping it when already indexed.

        Args:
            url: Document URL

        Returns:
            IngestionResult: Chunk count, or skipped=True on a cache hit

        Raises:
            UnsupportedFormatError: Extension not allowed (before any download)
            AcquisitionError: Download or parsing failed
            IndexingError: Embedding or upsert failed
        """
        document_format = self._acquisition_task.detect_format(url)
        start_time = time.perf_counter()
        content_hash = hash_locator(url)

        async with self._registry.claim(content_hash) as already_processed:
            if already_processed:
                logger.info(
                    f"{__name__}:ingest_url - Document already indexed, skipping",
                    extra={"content_hash": content_hash[:12]},
                )
                return IngestionResult(content_hash=content_hash, locator=url, skipped=True)

            async with self._acquisition_task.acquire_remote(url) as artifact:
                chunk_count = await self._process(
                    artifact,
                    DocumentSource(locator=url, format=document_format, content_hash=content_hash),
                )

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            f"{__name__}:ingest_url - Ingested document",
            extra={"content_hash": content_hash[:12], "chunks": chunk_count, "ms": round(elapsed_ms)},
        )
        return IngestionResult(
            content_hash=content_hash,
            locator=url,
            chunk_count=chunk_count,
            processing_time_ms=elapsed_ms,
        )

    async def ingest_upload(self, file_path: str | Path, filename: str) -> IngestionResult:
        """
        Ingest an uploaded file. The file is removed afterwards.

        The locator is derived from the file bytes, so re-uploading the same
        file is a cache hit.

        Args:
            file_path: Local path of the stored upload
            filename: Original upload filename

        Returns:
            IngestionResult: Chunk count, or skipped=True on a cache hit

        Raises:
            UnsupportedFormatError: Extension not allowed
            AcquisitionError: File missing or parsing failed
            IndexingError: Embedding or upsert failed
        """
        start_time = time.perf_counter()

        async with self._acquisition_task.acquire_local(file_path, filename) as artifact:
            document_format = self._acquisition_task.detect_format(filename)
            content = await run_in_threadpool(artifact.path.read_bytes)
            locator = upload_locator(filename, content)
            content_hash = hash_locator(locator)

            async with self._registry.claim(content_hash) as already_processed:
                if already_processed:
                    return IngestionResult(content_hash=content_hash, locator=locator, skipped=True)
                chunk_count = await self._process(
                    artifact,
                    DocumentSource(locator=locator, format=document_format, content_hash=content_hash),
                )

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            f"{__name__}:ingest_upload - Ingested upload",
            extra={"content_hash": content_hash[:12], "chunks": chunk_count},
        )
        return IngestionResult(
            content_hash=content_hash,
            locator=locator,
            chunk_count=chunk_count,
            processing_time_ms=elapsed_ms,
        )
