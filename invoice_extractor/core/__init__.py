"""
Core business logic module.

Contains the extraction pipeline, the chat agent and the exception hierarchy.
All business rules and domain-specific logic reside here.
"""

from invoice_extractor.core.exceptions import (
    DocumentProcessingError,
    DocumentUnavailableError,
    DuplicateSynonymError,
    ExtractionServiceError,
    InvoiceExtractorException,
    JobNotFoundError,
    NoTextFoundError,
    ParsingError,
    StorageError,
    SynonymNotFoundError,
    ValidationError,
)

__all__ = [
    "InvoiceExtractorException",
    "ValidationError",
    "JobNotFoundError",
    "SynonymNotFoundError",
    "DuplicateSynonymError",
    "DocumentProcessingError",
    "ParsingError",
    "NoTextFoundError",
    "DocumentUnavailableError",
    "ExtractionServiceError",
    "StorageError",
]
