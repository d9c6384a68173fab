"""
Job ORM model.

Tracks one ingestion run over a batch of uploaded invoices. Polled by clients
via GET /jobs/{id}; mutated only by the extraction pipeline.

Dependencies: sqlalchemy, invoice_extractor.boundary.db.base
System role: Ingestion job tracking for background extraction
"""

import enum

from sqlalchemy import Enum, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from invoice_extractor.boundary.db.base import Base, TimestampMixin, UUIDMixin


class InvoiceType(str, enum.Enum):
    """
    Extraction path selected at submission.

    REGULAR: PDFs with a text layer; text extraction then completion
    HANDWRITTEN: Scans, photos and handwritten invoices; vision completion
    """

    REGULAR = "regular"
    HANDWRITTEN = "handwritten"


class JobStatus(str, enum.Enum):
    """
    Ingestion job states.

    QUEUED: Job created, documents stored, pipeline not started
    RUNNING: Pipeline processing documents
    DONE: Results persisted (possibly zero)
    ERROR: Run aborted; message carries the failure description
    """

    QUEUED = "queued"
    RUNNING = "running"
    DONE = "done"
    ERROR = "error"


ACTIVE_JOB_STATUSES = (JobStatus.QUEUED, JobStatus.RUNNING)


class JobModel(Base, UUIDMixin, TimestampMixin):
    """
    Job ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        invoice_type: Extraction path (REGULAR/HANDWRITTEN)
        status: Current state (QUEUED/RUNNING/DONE/ERROR)
        progress: Percentage complete (0-100), non-decreasing while running
        documents_processed: Number of documents handled by the run
        total_records: Number of Result rows persisted
        message: Human-readable progress or failure text
        created_at: Submission timestamp (UTC)
        updated_at: Last status update timestamp (UTC)

    Workflow:
        1. Ingestion creates the job with status=QUEUED, progress=0
        2. Pipeline moves it to RUNNING and reports progress 5..95
        3. Pipeline finishes with DONE (progress=100) or ERROR
        4. Terminal rows are never updated again
    """

    __tablename__ = "jobs"

    invoice_type: Mapped[InvoiceType] = mapped_column(
        Enum(InvoiceType, native_enum=False, length=32),
        nullable=False,
        default=InvoiceType.REGULAR,
    )

    status: Mapped[JobStatus] = mapped_column(
        Enum(JobStatus, native_enum=False, length=32),
        nullable=False,
        default=JobStatus.QUEUED,
        index=True,
    )

    progress: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        doc="Progress percentage (0-100)",
    )

    documents_processed: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    total_records: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    message: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
