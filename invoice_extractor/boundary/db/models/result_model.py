"""
Result ORM model.

One canonicalized line item extracted from a document page. Rows are written
once, in a single bulk insert per job, and never mutated.

Dependencies: sqlalchemy, invoice_extractor.boundary.db.base
System role: Persisted extraction output
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from invoice_extractor.boundary.db.base import Base, UUIDMixin, utc_now


class ResultModel(Base, UUIDMixin):
    """
    Result ORM model.

    Attributes:
        job_id: Job that produced the row
        doc_id: Source document (None if the document row is gone)
        doc_name: Source filename, denormalized for display
        page: 1-based page number
        original_term: Label as printed on the invoice
        canonical: Label after synonym canonicalization
        value: Sanitized numeric string
        confidence: Model confidence 0-100
        evidence: Supporting text excerpt (<= 200 chars)
    """

    __tablename__ = "results"

    job_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("jobs.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    doc_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("documents.id", ondelete="SET NULL"),
        nullable=True,
    )

    doc_name: Mapped[str] = mapped_column(String(512), nullable=False)

    page: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    original_term: Mapped[str] = mapped_column(String(512), nullable=False)

    canonical: Mapped[str] = mapped_column(String(512), nullable=False)

    value: Mapped[str] = mapped_column(String(64), nullable=False)

    confidence: Mapped[int] = mapped_column(Integer, nullable=False, default=90)

    evidence: Mapped[str] = mapped_column(Text, nullable=False, default="")

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False,
    )
