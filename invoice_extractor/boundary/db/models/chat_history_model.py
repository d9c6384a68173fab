"""
Chat history ORM model.

Stores question/answer pairs asked against a job's extracted results.

Dependencies: sqlalchemy, invoice_extractor.boundary.db.base
System role: Chat Q&A persistence
"""

import uuid

from sqlalchemy import ForeignKey, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from invoice_extractor.boundary.db.base import Base, TimestampMixin, UUIDMixin


class ChatHistoryModel(Base, UUIDMixin, TimestampMixin):
    """
    Chat exchange ORM model.

    Attributes:
        job_id: Job whose results were queried (None for global questions)
        question: User question
        answer: Model answer
    """

    __tablename__ = "chat_history"

    job_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("jobs.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )

    question: Mapped[str] = mapped_column(Text, nullable=False)

    answer: Mapped[str] = mapped_column(Text, nullable=False)
