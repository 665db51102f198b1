"""
Exception hierarchy for the document Q&A service.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Ingestion-phase errors (UnsupportedFormatError, AcquisitionError,
IndexingError) are fatal to a request. Answer-phase errors (RetrievalError,
SynthesisError) are isolated per question and degrade to a fixed message.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class DocQAException(Exception):
    """Base exception for all document Q&A errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class UnauthorizedError(DocQAException):
    """Raised when the bearer token is missing or does not match."""

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class InvalidRequestError(DocQAException):
    """Raised when required request fields are missing or malformed."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize invalid request error.

        Args:
            message: Error message returned to the caller
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class DocumentProcessingError(DocQAException):
    """Base exception for ingestion errors."""

    def __init__(
        self,
        message: str,
        locator: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize document processing error.

        Args:
            message: Error message
            locator: URL or upload locator of the document
            details: Additional context
        """
        details = details or {}
        if locator:
            details["locator"] = locator
        super().__init__(message, details)


class UnsupportedFormatError(DocumentProcessingError):
    """Raised when a document extension is outside the allow-list."""

    def __init__(self, extension: str, locator: str | None = None) -> None:
        self.extension = extension
        shown = extension or "<none>"
        super().__init__(
            f"Unsupported document format: {shown}",
            locator,
            {"extension": shown},
        )


class AcquisitionError(DocumentProcessingError):
    """Raised when a document cannot be downloaded or stored locally."""

    pass


class ParsingError(AcquisitionError):
    """Raised when a fetched document yields no usable text."""

    def __init__(
        self,
        message: str,
        locator: str | None = None,
        file_type: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize parsing error.

        Args:
            message: Error message
            locator: Document locator
            file_type: Type of file that failed parsing
            details: Additional context
        """
        details = details or {}
        if file_type:
            details["file_type"] = file_type
        super().__init__(message, locator, details)


class IndexingError(DocumentProcessingError):
    """Raised when embedding or upserting chunks fails."""

    pass


class RetrievalError(DocQAException):
    """Raised when the vector index query fails after all attempts."""

    def __init__(
        self,
        message: str,
        attempts: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if attempts is not None:
            details["attempts"] = attempts
        super().__init__(message, details)


class SynthesisError(DocQAException):
    """Raised when the LLM call for an answer fails."""

    pass


class RewriteError(DocQAException):
    """Raised when the LLM cannot produce a standalone question."""

    pass


class VectorStoreError(DocQAException):
    """Raised when a vector index operation fails."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize vector store error.

        Args:
            message: Error message
            operation: Operation that failed (upsert, query)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)
