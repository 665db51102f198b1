"""
Q&A endpoint models and schemas.

Request/response schemas for POST /hackrx/run (batch and chat variants).

Dependencies: pydantic
System role: Q&A API contracts
"""

from typing import Any, Literal

from pydantic import BaseModel, Field, ValidationError, field_validator

from docqa.core.exceptions import InvalidRequestError

BATCH_REQUEST_ERROR = "Missing documents or questions array"
CHAT_REQUEST_ERROR = "Missing question"


class BatchRunRequest(BaseModel):
    """Request schema for batch questions about one document."""

    documents: str = Field(description="URL of a PDF or DOCX document")
    questions: list[str] = Field(description="Questions to answer, in order")

    @field_validator("documents")
    @classmethod
    def _non_empty(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("documents must not be empty")
        return value


class ChatRunRequest(BaseModel):
    """Request schema for a single chat message."""

    question: str = Field(min_length=1, description="User question")


class BatchRunResponse(BaseModel):
    """Answers in question order, or keyed by question."""

    answers: list[str] | dict[str, str]


class ChatRunResponse(BaseModel):
    answer: str


class ErrorResponse(BaseModel):
    error: str


AnswerFormat = Literal["list", "keyed"]


def parse_run_request(body: Any) -> BatchRunRequest | ChatRunRequest:
    """
    Pick the request variant from the body shape and validate it.

    A body with "documents" or "questions" is a batch request; a body with
    only "question" is a chat request.

    Raises:
        InvalidRequestError: Body is not an object or required fields are missing
    """
    if not isinstance(body, dict):
        raise InvalidRequestError(BATCH_REQUEST_ERROR, field="body")

    if "question" in body and "documents" not in body and "questions" not in body:
        try:
            return ChatRunRequest.model_validate(body)
        except ValidationError as e:
            raise InvalidRequestError(CHAT_REQUEST_ERROR, field="question") from e

    try:
        return BatchRunRequest.model_validate(body)
    except ValidationError as e:
        raise InvalidRequestError(BATCH_REQUEST_ERROR, field="documents") from e
