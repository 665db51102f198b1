"""
Document upload endpoints.

Routes: GET /upload (HTML form), POST /upload (multipart file)

Uploaded files are written to a temp directory and ingested through the same
pipeline as remote documents; the temp directory is removed afterwards.

Dependencies: fastapi, docqa.application.services
System role: Upload HTTP API
"""

import logging
import shutil
import tempfile
import uuid
from pathlib import Path

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import HTMLResponse, PlainTextResponse

from docqa.api.deps import get_qa_service, get_settings_dependency
from docqa.application.services import QAService
from docqa.configs import Settings
from docqa.core.exceptions import UnsupportedFormatError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/upload", tags=["upload"])

UPLOAD_SUCCESS = "Document uploaded and indexed successfully."
UPLOAD_FAILURE = "Something went wrong while uploading."

UPLOAD_FORM = """<!DOCTYPE html>
<html>
  <body>
    <h2>Upload a document</h2>
    <form action="/upload" method="post" enctype="multipart/form-data">
      <input type="file" name="file" accept=".pdf,.docx" required />
      <button type="submit">Upload</button>
    </form>
  </body>
</html>
"""


def require_upload_enabled(settings: Settings = Depends(get_settings_dependency)) -> None:
    if not settings.server.upload_enabled:
        raise HTTPException(status_code=404, detail="Not Found")


def cleanup_temp_file(file_path: str | Path) -> None:
    """
    Safely remove temporary file and its parent temp directory.

    Args:
        file_path: Path to temporary file to delete
    """
    try:
        path = Path(file_path)
        parent_dir = path.parent
        if path.exists():
            path.unlink()
        if parent_dir.exists() and parent_dir.name.startswith("docqa_upload_"):
            shutil.rmtree(parent_dir, ignore_errors=True)
    except OSError as e:
        logger.warning(f"{__name__}:cleanup_temp_file - Failed to remove {file_path}: {e}")


@router.get("", response_class=HTMLResponse, dependencies=[Depends(require_upload_enabled)])
async def upload_form() -> str:
    """Serve the upload form."""
    return UPLOAD_FORM


@router.post("", response_class=PlainTextResponse, dependencies=[Depends(require_upload_enabled)])
async def upload_document(
    file: UploadFile = File(...),
    qa_service: QAService = Depends(get_qa_service),
) -> PlainTextResponse:
    """
    Ingest an uploaded PDF or DOCX document.

    Args:
        file: Uploaded file (multipart form field "file")
        qa_service: Injected QAService

    Returns:
        PlainTextResponse: Success message (200), unsupported format (415)
        or generic failure (500)
    """
    filename = Path(file.filename or "").name
    temp_path = Path(tempfile.mkdtemp(prefix="docqa_upload_")) / f"{uuid.uuid4()}{Path(filename).suffix.lower()}"

    try:
        await run_in_threadpool(temp_path.write_bytes, await file.read())
        result = await qa_service.ingest_upload(temp_path, filename)
    except UnsupportedFormatError as e:
        logger.warning(
            "Upload rejected: invalid file type",
            extra={"document_name": filename, "extension": e.extension},
        )
        return PlainTextResponse(e.message, status_code=415)
    except Exception:
        logger.exception("Error processing uploaded document", extra={"document_name": filename})
        return PlainTextResponse(UPLOAD_FAILURE, status_code=500)
    finally:
        await run_in_threadpool(cleanup_temp_file, temp_path)

    logger.info(
        "Document uploaded",
        extra={"document_name": filename, "chunks": result.chunk_count, "skipped": result.skipped},
    )
    return PlainTextResponse(UPLOAD_SUCCESS)
