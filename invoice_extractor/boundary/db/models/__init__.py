"""
Database models package.

Exports:
  - JobModel, JobStatus, InvoiceType: Ingestion job and enums
  - DocumentModel, DocumentStatus: Uploaded document and status enum
  - ResultModel: Persisted extraction line items
  - SynonymModel: Canonicalization table
  - ChatHistoryModel: Q&A exchanges

Dependencies: sqlalchemy, invoice_extractor.boundary.db.base
System role: Database model definitions for domain entities
"""

from invoice_extractor.boundary.db.models.chat_history_model import ChatHistoryModel
from invoice_extractor.boundary.db.models.document_model import DocumentModel, DocumentStatus
from invoice_extractor.boundary.db.models.job_model import (
    ACTIVE_JOB_STATUSES,
    InvoiceType,
    JobModel,
    JobStatus,
)
from invoice_extractor.boundary.db.models.result_model import ResultModel
from invoice_extractor.boundary.db.models.synonym_model import SynonymModel, normalize_term

__all__ = [
    "ACTIVE_JOB_STATUSES",
    "ChatHistoryModel",
    "DocumentModel",
    "DocumentStatus",
    "InvoiceType",
    "JobModel",
    "JobStatus",
    "ResultModel",
    "SynonymModel",
    "normalize_term",
]
