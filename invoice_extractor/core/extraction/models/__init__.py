"""
Models for the extraction pipeline.

Exports: ExtractedRecord, ExtractionResult, DocumentPayload, JobMessage, QueuedDocument
"""

from .document_payload import DocumentPayload
from .extraction_result import ExtractedRecord, ExtractionResult
from .job_message import JobMessage, QueuedDocument

__all__ = [
    "DocumentPayload",
    "ExtractedRecord",
    "ExtractionResult",
    "JobMessage",
    "QueuedDocument",
]
