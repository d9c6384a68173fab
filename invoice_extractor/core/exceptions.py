"""
Exception hierarchy for the Invoice Extractor application.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any

INTERNAL_ERROR_MESSAGE = "unexpected internal error"


class InvoiceExtractorException(Exception):
    """Base exception for all Invoice Extractor application errors."""

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


class ValidationError(InvoiceExtractorException):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class JobNotFoundError(InvoiceExtractorException):
    """Raised when an ingestion job cannot be found."""

    def __init__(self, job_id: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["job_id"] = job_id
        super().__init__(f"Job not found: {job_id}", details)


class SynonymNotFoundError(InvoiceExtractorException):
    """Raised when a synonym row cannot be found."""

    def __init__(self, synonym_id: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["synonym_id"] = synonym_id
        super().__init__(f"Synonym not found: {synonym_id}", details)


class DuplicateSynonymError(InvoiceExtractorException):
    """Raised when a synonym term collides with an existing row."""

    def __init__(self, term: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize duplicate synonym error.

        Args:
            term: Term that already exists (case-insensitive)
            details: Additional context
        """
        details = details or {}
        details["term"] = term
        super().__init__(f"Synonym already exists for term: {term}", details)


class DocumentProcessingError(InvoiceExtractorException):
    """Base exception for document processing errors."""

    def __init__(
        self,
        message: str,
        document_name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize document processing error.

        Args:
            message: Error message
            document_name: Name of the document that failed
            details: Additional context
        """
        details = details or {}
        if document_name:
            details["document_name"] = document_name
        super().__init__(message, details)


class ParsingError(DocumentProcessingError):
    """Raised when document text extraction fails."""

    def __init__(
        self,
        message: str,
        document_name: str | None = None,
        file_type: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize parsing error.

        Args:
            message: Error message
            document_name: Name of the document
            file_type: Type of file that failed parsing
            details: Additional context
        """
        details = details or {}
        if file_type:
            details["file_type"] = file_type
        super().__init__(message, document_name, details)


class NoTextFoundError(ParsingError):
    """Raised when a PDF has no text layer (likely a scanned document)."""

    def __init__(self, document_name: str | None = None) -> None:
        super().__init__(
            "No text found in PDF - possibly a scanned document",
            document_name=document_name,
            file_type="pdf",
        )


class DocumentUnavailableError(DocumentProcessingError):
    """Raised when a document's content cannot be read or downloaded."""

    pass


class ExtractionServiceError(InvoiceExtractorException):
    """Raised when the completion service call fails after retries."""

    def __init__(
        self,
        message: str,
        model: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if model:
            details["model"] = model
        super().__init__(message, details)


class StorageError(InvoiceExtractorException):
    """Raised when blob storage or job queue operations fail."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize storage error.

        Args:
            message: Error message
            operation: Operation that failed (upload, download, publish)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


def user_message(exc: BaseException) -> str:
    """
    Description of a failure that is safe to show end users.

    Domain exceptions carry a human-readable message. Anything else may hold
    SQL, identifiers or paths in its text, so only a generic description is
    returned and the full error belongs in the logs.

    Args:
        exc: Raised exception

    Returns:
        str: User-facing description
    """
    if isinstance(exc, InvoiceExtractorException) and exc.message:
        return exc.message
    return INTERNAL_ERROR_MESSAGE
