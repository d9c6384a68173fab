"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(): Connection management
  - JobModel, DocumentModel, ResultModel, SynonymModel, ChatHistoryModel: Domain entities
  - JobStatus, InvoiceType, DocumentStatus: Enum types for state tracking
  - job_crud, document_crud, result_crud, synonym_crud, chat_history_crud: CRUD singletons

Dependencies: sqlalchemy, invoice_extractor.configs
System role: Database adapter providing persistent storage for jobs, documents,
extraction results, synonyms and chat exchanges.
"""

from invoice_extractor.boundary.db.base import Base, TimestampMixin, UUIDMixin
from invoice_extractor.boundary.db.connection import (
    create_all_tables,
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)
from invoice_extractor.boundary.db.models import (
    ChatHistoryModel,
    DocumentModel,
    DocumentStatus,
    InvoiceType,
    JobModel,
    JobStatus,
    ResultModel,
    SynonymModel,
)
from invoice_extractor.boundary.db.CRUD import (
    BaseCRUD,
    chat_history_crud,
    document_crud,
    job_crud,
    result_crud,
    synonym_crud,
)

__all__ = [
    # Base classes
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    # Connection
    "create_all_tables",
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    # Models
    "ChatHistoryModel",
    "DocumentModel",
    "DocumentStatus",
    "InvoiceType",
    "JobModel",
    "JobStatus",
    "ResultModel",
    "SynonymModel",
    # CRUD
    "BaseCRUD",
    "chat_history_crud",
    "document_crud",
    "job_crud",
    "result_crud",
    "synonym_crud",
]
