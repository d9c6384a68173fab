"""
Job CRUD operations.

Provides Create, Read, Update, Delete operations for JobModel with the
state-machine transitions used by the extraction pipeline. Every transition
is a conditional UPDATE on a non-terminal row, so a job in DONE or ERROR can
never be modified again.

Dependencies: sqlalchemy, invoice_extractor.boundary.db.models
System role: Job persistence operations for ingestion tracking
"""

from uuid import UUID

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from invoice_extractor.boundary.db.CRUD.base_crud import BaseCRUD
from invoice_extractor.boundary.db.models.job_model import (
    ACTIVE_JOB_STATUSES,
    InvoiceType,
    JobModel,
    JobStatus,
)


class JobCRUD(BaseCRUD[JobModel]):
    """
    CRUD operations for JobModel.

    Extends BaseCRUD with status queries and guarded state transitions.
    """

    def __init__(self) -> None:
        """Initialize JobCRUD with JobModel."""
        super().__init__(JobModel)

    async def create_queued(
        self,
        session: AsyncSession,
        invoice_type: InvoiceType,
        message: str | None = None,
    ) -> JobModel:
        """
        Create a new job in QUEUED state with zero progress.

        Args:
            session: Async database session
            invoice_type: Extraction path for the job
            message: Optional initial message

        Returns:
            Created JobModel
        """
        return await self.create(
            session,
            invoice_type=invoice_type,
            status=JobStatus.QUEUED,
            progress=0,
            message=message,
        )

    async def update_if_active(
        self,
        session: AsyncSession,
        id: UUID,
        **fields,
    ) -> JobModel | None:
        """
        Update a job only while it is QUEUED or RUNNING.

        Args:
            session: Async database session
            id: Job UUID
            **fields: Columns to update

        Returns:
            Updated JobModel, or None if the job is missing or terminal
        """
        stmt = (
            update(JobModel)
            .where(JobModel.id == id, JobModel.status.in_(ACTIVE_JOB_STATUSES))
            .values(**fields)
            .returning(JobModel)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def mark_running(
        self,
        session: AsyncSession,
        id: UUID,
        progress: int,
        message: str,
    ) -> JobModel | None:
        """
        Move a job to RUNNING.

        Args:
            session: Async database session
            id: Job UUID
            progress: Initial progress percentage
            message: Progress message

        Returns:
            Updated JobModel, or None if the job is missing or terminal
        """
        return await self.update_if_active(
            session, id, status=JobStatus.RUNNING, progress=progress, message=message
        )

    async def update_progress(
        self,
        session: AsyncSession,
        id: UUID,
        progress: int,
        message: str | None = None,
    ) -> JobModel | None:
        """
        Update progress percentage and message of an active job.

        Args:
            session: Async database session
            id: Job UUID
            progress: Progress percentage (0-100)
            message: Optional progress message

        Returns:
            Updated JobModel, or None if the job is missing or terminal
        """
        fields: dict = {"progress": progress}
        if message is not None:
            fields["message"] = message
        return await self.update_if_active(session, id, **fields)

    async def mark_done(
        self,
        session: AsyncSession,
        id: UUID,
        documents_processed: int,
        total_records: int,
        message: str,
    ) -> JobModel | None:
        """
        Mark job as successfully finished.

        Args:
            session: Async database session
            id: Job UUID
            documents_processed: Number of documents in the batch
            total_records: Number of Result rows persisted
            message: Summary message

        Returns:
            Updated JobModel, or None if the job is missing or terminal
        """
        return await self.update_if_active(
            session,
            id,
            status=JobStatus.DONE,
            progress=100,
            documents_processed=documents_processed,
            total_records=total_records,
            message=message,
        )

    async def mark_error(
        self,
        session: AsyncSession,
        id: UUID,
        message: str,
    ) -> JobModel | None:
        """
        Mark job as failed. Progress is left where the run stopped.

        Args:
            session: Async database session
            id: Job UUID
            message: Human-readable failure message

        Returns:
            Updated JobModel, or None if the job is missing or terminal
        """
        return await self.update_if_active(
            session, id, status=JobStatus.ERROR, message=message
        )


job_crud = JobCRUD()
