"""
Text chunking task using a fixed-window splitter.

Splits parsed pages into overlapping windows of exactly chunk_size characters
(the last one may be shorter). Windows start every chunk_size - chunk_overlap
characters, so every character lands in at least one chunk.

Dependencies: langchain_text_splitters, langchain_core
System role: Second stage of document ingestion pipeline
"""

from typing import Any

from langchain_core.documents import Document
from langchain_text_splitters import TextSplitter

from docqa.core.document_processing.models import Chunk


class FixedWindowTextSplitter(TextSplitter):
    """Character windows of fixed size with fixed overlap."""

    def __init__(self, chunk_size: int = 1000, chunk_overlap: int = 200, **kwargs: Any) -> None:
        if chunk_overlap >= chunk_size:
            raise ValueError(
                f"chunk_overlap ({chunk_overlap}) must be smaller than chunk_size ({chunk_size})"
            )
        super().__init__(
            chunk_size=chunk_size,
            chunk_overlap=chunk_overlap,
            add_start_index=True,
            strip_whitespace=False,
            **kwargs,
        )

    def split_text(self, text: str) -> list[str]:
        step = self._chunk_size - self._chunk_overlap
        windows = []
        start = 0
        while start < len(text):
            end = start + self._chunk_size
            windows.append(text[start:end])
            if end >= len(text):
                break
            start += step
        return windows


class ChunkingTask:
    """Split page documents into position-numbered chunks."""

    def __init__(
        self,
        chunk_size: int = 1000,
        chunk_overlap: int = 200,
    ) -> None:
        """
        Initialize chunking task with splitter configuration.

        Args:
            chunk_size: Window size in characters
            chunk_overlap: Characters shared by consecutive windows

        Raises:
            ValueError: When chunk_overlap is not smaller than chunk_size
        """
        self._splitter = FixedWindowTextSplitter(
            chunk_size=chunk_size,
            chunk_overlap=chunk_overlap,
        )

    def chunk(self, documents: list[Document], content_hash: str) -> list[Chunk]:
        """
        Split documents into chunks.

        Each page is windowed separately; positions run across the whole
        document in page order.

        Args:
            documents: Parsed page documents
            content_hash: Content-hash of the source document

        Returns:
            list[Chunk]: Ordered chunks

        Raises:
            ValueError: When documents list is empty
        """
        if not documents:
            raise ValueError("No documents to chunk")

        pieces = self._splitter.split_documents(documents)
        return [
            Chunk(
                text=piece.page_content,
                content_hash=content_hash,
                position=position,
                page=piece.metadata.get("page"),
                start_index=piece.metadata.get("start_index", 0),
            )
            for position, piece in enumerate(pieces)
        ]
