"""API request/response models."""

from docqa.models.hackrx import (
    BatchRunRequest,
    BatchRunResponse,
    ChatRunRequest,
    ChatRunResponse,
    ErrorResponse,
    parse_run_request,
)

__all__ = [
    "BatchRunRequest",
    "BatchRunResponse",
    "ChatRunRequest",
    "ChatRunResponse",
    "ErrorResponse",
    "parse_run_request",
]
