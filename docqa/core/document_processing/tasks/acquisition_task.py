"""
Document acquisition task.

Validates the document format from its locator, then provides a transient
local copy (downloaded over HTTP, or an already-uploaded file) for the
duration of an async context. The local copy is always removed on exit.

Dependencies: httpx, fastapi.concurrency
System role: First stage of document ingestion pipeline
"""

import logging
import shutil
import tempfile
import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path
from urllib.parse import urlsplit

import httpx
from fastapi.concurrency import run_in_threadpool

from docqa.core.document_processing.models import DocumentFormat, LocalArtifact
from docqa.core.exceptions import AcquisitionError, UnsupportedFormatError

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = (".pdf", ".docx")


def detect_format(
    locator: str,
    allowed_extensions: tuple[str, ...] | list[str] = ALLOWED_EXTENSIONS,
) -> DocumentFormat:
    """
    Determine document format from the path of a URL or filename.

    Query string and fragment are ignored; the comparison is case-insensitive.

    Args:
        locator: Document URL or filename
        allowed_extensions: Accepted extensions including the dot

    Returns:
        DocumentFormat: "pdf" or "docx"

    Raises:
        UnsupportedFormatError: When the extension is missing or not allowed
    """
    path = urlsplit(locator).path if "://" in locator else locator
    extension = Path(path).suffix.lower()
    allowed = {ext.lower() for ext in allowed_extensions}
    if extension not in allowed or extension not in ALLOWED_EXTENSIONS:
        raise UnsupportedFormatError(extension, locator)
    return extension.lstrip(".")


def cleanup_artifact(artifact: LocalArtifact) -> None:
    """
    Remove a local artifact and its owning temp directory.

    Args:
        artifact: Artifact to remove
    """
    try:
        if artifact.temp_dir is not None:
            shutil.rmtree(artifact.temp_dir, ignore_errors=True)
        elif artifact.path.exists():
            artifact.path.unlink()
        logger.debug(f"{__name__}:cleanup_artifact - Removed {artifact.path}")
    except OSError as e:
        logger.warning(f"{__name__}:cleanup_artifact - Failed to remove {artifact.path}: {e}")


class AcquisitionTask:
    """Fetch documents into transient local files."""

    def __init__(
        self,
        timeout_seconds: float = 60.0,
        max_bytes: int = 50 * 1024 * 1024,
        allowed_extensions: tuple[str, ...] | list[str] = ALLOWED_EXTENSIONS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize acquisition task.

        Args:
            timeout_seconds: Deadline for the whole download
            max_bytes: Reject documents larger than this
            allowed_extensions: Accepted extensions including the dot
            transport: Optional httpx transport (tests)
        """
        self._timeout = timeout_seconds
        self._max_bytes = max_bytes
        self._allowed_extensions = tuple(allowed_extensions)
        self._transport = transport

    def detect_format(self, locator: str) -> DocumentFormat:
        return detect_format(locator, self._allowed_extensions)

    async def _download(self, url: str, destination: Path) -> int:
        received = 0
        async with httpx.AsyncClient(
            timeout=self._timeout,
            follow_redirects=True,
            transport=self._transport,
        ) as client:
            async with client.stream("GET", url) as response:
                response.raise_for_status()
                handle = await run_in_threadpool(destination.open, "wb")
                try:
                    async for block in response.aiter_bytes():
                        received += len(block)
                        if received > self._max_bytes:
                            raise AcquisitionError(
                                f"Document exceeds {self._max_bytes} bytes",
                                url,
                            )
                        await run_in_threadpool(handle.write, block)
                finally:
                    await run_in_threadpool(handle.close)
        return received

    @asynccontextmanager
    async def acquire_remote(self, url: str) -> AsyncIterator[LocalArtifact]:
        """
        Download a document into a unique temp file.

        The format gate runs before any network I/O.

        Args:
            url: Document URL

        Yields:
            LocalArtifact: Local copy, removed when the context exits

        Raises:
            UnsupportedFormatError: Extension not allowed (nothing downloaded)
            AcquisitionError: HTTP error, transport error or timeout
        """
        document_format = self.detect_format(url)
        temp_dir = Path(tempfile.mkdtemp(prefix="docqa_"))
        artifact = LocalArtifact(
            path=temp_dir / f"{uuid.uuid4()}.{document_format}",
            temp_dir=temp_dir,
        )

        try:
            try:
                size = await self._download(url, artifact.path)
            except httpx.HTTPStatusError as e:
                raise AcquisitionError(
                    f"Failed to download document: HTTP {e.response.status_code}",
                    url,
                    {"status_code": e.response.status_code},
                ) from e
            except httpx.TimeoutException as e:
                raise AcquisitionError(
                    f"Timed out downloading document after {self._timeout}s", url
                ) from e
            except httpx.HTTPError as e:
                raise AcquisitionError(f"Failed to download document: {e}", url) from e

            logger.info(
                f"{__name__}:acquire_remote - Downloaded document",
                extra={"bytes": size, "format": document_format},
            )
            yield artifact
        finally:
            await run_in_threadpool(cleanup_artifact, artifact)

    @asynccontextmanager
    async def acquire_local(self, path: str | Path, filename: str) -> AsyncIterator[LocalArtifact]:
        """
        Take ownership of an already-stored upload.

        Args:
            path: Local path of the uploaded file
            filename: Original upload filename (used for the format gate)

        Yields:
            LocalArtifact: The upload, removed when the context exits

        Raises:
            UnsupportedFormatError: Extension not allowed
            AcquisitionError: File does not exist
        """
        path = Path(path)
        artifact = LocalArtifact(path=path)
        try:
            self.detect_format(filename)
            if not path.exists():
                raise AcquisitionError(f"Uploaded file not found: {filename}", filename)
            yield artifact
        finally:
            await run_in_threadpool(cleanup_artifact, artifact)
