"""
Read-path schemas.

Dependencies: pydantic
System role: Retrieval and answer data structures
"""

from enum import Enum

from pydantic import BaseModel, Field


class AnswerStatus(str, Enum):
    ANSWERED = "answered"
    NOT_FOUND = "not_found"
    FAILED = "failed"


class RetrievedPassage(BaseModel):
    """Passage returned by the retriever, ranked by similarity."""

    rank: int = Field(ge=1, description="1-based similarity rank")
    text: str = Field(description="Chunk text")
    score: float = Field(description="Similarity score")
    page: int | None = Field(default=None, description="Page number in source document")


class QuestionAnswerResult(BaseModel):
    """Answer for a single question."""

    question: str
    answer: str
    excerpts: list[str] = Field(default_factory=list, description="Texts of the passages used")
    status: AnswerStatus = AnswerStatus.ANSWERED
