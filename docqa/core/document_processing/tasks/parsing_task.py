"""
Document parsing task using LangChain document loaders.

Converts PDF (PyPDFLoader, one Document per page) and DOCX (Docx2txtLoader,
one Document) files into LangChain Documents.

Dependencies: langchain_community.document_loaders, fastapi.concurrency
System role: Parser bridge between acquisition and chunking
"""

import logging
from pathlib import Path

from fastapi.concurrency import run_in_threadpool
from langchain_community.document_loaders import Docx2txtLoader, PyPDFLoader
from langchain_core.documents import Document

from docqa.core.document_processing.models import DocumentFormat
from docqa.core.exceptions import ParsingError

logger = logging.getLogger(__name__)

LOADERS = {
    "pdf": PyPDFLoader,
    "docx": Docx2txtLoader,
}


class ParsingTask:
    """Parse PDF and DOCX documents into LangChain Documents."""

    def _load(self, file_path: str, document_format: DocumentFormat) -> list[Document]:
        loader = LOADERS[document_format](file_path)
        return loader.load()

    async def parse(self, file_path: str | Path, document_format: DocumentFormat) -> list[Document]:
        """
        Parse a document into page units.

        Args:
            file_path: Path to the local document
            document_format: "pdf" or "docx"

        Returns:
            list[Document]: Parsed documents with content and metadata

        Raises:
            ParsingError: When the file is missing, unreadable or has no text
        """
        path = Path(file_path)
        if not path.exists():
            raise ParsingError(f"File not found: {path.name}", str(path), document_format)

        if document_format not in LOADERS:
            raise ParsingError(
                f"No parser for format: {document_format}", str(path), document_format
            )

        try:
            documents = await run_in_threadpool(self._load, str(path), document_format)
        except Exception as e:
            raise ParsingError(
                f"Failed to parse {document_format.upper()}: {e}", str(path), document_format
            ) from e

        if not any(doc.page_content.strip() for doc in documents):
            raise ParsingError(
                f"{document_format.upper()} document contains no extractable text",
                str(path),
                document_format,
            )

        logger.info(
            f"{__name__}:parse - Parsed {len(documents)} page units",
            extra={"format": document_format},
        )
        return documents
