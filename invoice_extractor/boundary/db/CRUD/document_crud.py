"""
Document CRUD operations.

Provides Create, Read, Update, Delete operations for DocumentModel with
job-scoped queries and the document history listing.

Dependencies: sqlalchemy, invoice_extractor.boundary.db.models
System role: Document persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from invoice_extractor.boundary.db.CRUD.base_crud import BaseCRUD
from invoice_extractor.boundary.db.models.document_model import DocumentModel, DocumentStatus
from invoice_extractor.boundary.db.models.job_model import JobModel, JobStatus
from invoice_extractor.boundary.db.models.result_model import ResultModel


class DocumentCRUD(BaseCRUD[DocumentModel]):
    """
    CRUD operations for DocumentModel.

    Extends BaseCRUD with job filtering, batch status updates and history.
    """

    def __init__(self) -> None:
        """Initialize DocumentCRUD with DocumentModel."""
        super().__init__(DocumentModel)

    async def get_by_job_id(
        self,
        session: AsyncSession,
        job_id: UUID,
    ) -> Sequence[DocumentModel]:
        """
        Retrieve all documents of a job in upload order.

        Args:
            session: Async database session
            job_id: Owning job UUID

        Returns:
            Sequence of DocumentModels belonging to the job
        """
        stmt = (
            select(DocumentModel)
            .where(DocumentModel.job_id == job_id)
            .order_by(DocumentModel.created_at.asc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def set_status(
        self,
        session: AsyncSession,
        id: UUID,
        status: DocumentStatus,
        error_message: str | None = None,
    ) -> None:
        """
        Set the processing status of one document.

        Args:
            session: Async database session
            id: Document UUID
            status: New status
            error_message: Failure description (FAILED only)
        """
        stmt = (
            update(DocumentModel)
            .where(DocumentModel.id == id)
            .values(status=status, error_message=error_message)
        )
        await session.execute(stmt)

    async def get_history(
        self,
        session: AsyncSession,
        limit: int = 50,
    ) -> list[tuple[DocumentModel, JobStatus | None, int]]:
        """
        Recent documents with their job status and persisted record count.

        Args:
            session: Async database session
            limit: Maximum number of documents

        Returns:
            List of (document, job status or None, record count), newest first
        """
        record_count = (
            select(func.count(ResultModel.id))
            .where(ResultModel.doc_id == DocumentModel.id)
            .correlate(DocumentModel)
            .scalar_subquery()
        )
        stmt = (
            select(DocumentModel, JobModel.status, record_count)
            .outerjoin(JobModel, JobModel.id == DocumentModel.job_id)
            .order_by(DocumentModel.created_at.desc())
            .limit(limit)
        )
        result = await session.execute(stmt)
        return [(doc, status, count or 0) for doc, status, count in result.all()]


document_crud = DocumentCRUD()
