"""
Document ORM model.

One uploaded invoice file. Blob storage is best-effort, so storage_path may
stay empty while the document is still processed from memory.

Dependencies: sqlalchemy, invoice_extractor.boundary.db.base
System role: Uploaded document metadata
"""

import enum
import uuid

from sqlalchemy import BigInteger, Enum, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from invoice_extractor.boundary.db.base import Base, TimestampMixin, UUIDMixin


class DocumentStatus(str, enum.Enum):
    """Document lifecycle: uploaded on submission, then processed or failed."""

    UPLOADED = "uploaded"
    PROCESSED = "processed"
    FAILED = "failed"


class DocumentModel(Base, UUIDMixin, TimestampMixin):
    """
    Document ORM model.

    Attributes:
        job_id: Owning ingestion job
        name: Original filename
        size_bytes: Upload size
        content_type: MIME type reported by the client
        storage_path: Blob key (None when the upload was skipped or failed)
        status: UPLOADED/PROCESSED/FAILED
        error_message: Failure description for FAILED documents
    """

    __tablename__ = "documents"

    job_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("jobs.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    name: Mapped[str] = mapped_column(String(512), nullable=False)

    size_bytes: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)

    content_type: Mapped[str | None] = mapped_column(String(255), nullable=True)

    storage_path: Mapped[str | None] = mapped_column(String(1024), nullable=True)

    status: Mapped[DocumentStatus] = mapped_column(
        Enum(DocumentStatus, native_enum=False, length=32),
        nullable=False,
        default=DocumentStatus.UPLOADED,
    )

    error_message: Mapped[str | None] = mapped_column(Text, nullable=True)
