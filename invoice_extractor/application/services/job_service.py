"""
Job service orchestrator.

Read side of job tracking. State transitions belong to the extraction
pipeline; this service only answers polling requests.

Dependencies: invoice_extractor.boundary.db.CRUD, invoice_extractor.boundary.db.models
System role: Job status reporting
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from invoice_extractor.boundary.db.CRUD.job_crud import job_crud
from invoice_extractor.boundary.db.models.job_model import JobModel
from invoice_extractor.core.exceptions import JobNotFoundError


class JobService:
    """
    Job service orchestrator.

    Provides abstraction over JobCRUD for status polling.
    """

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize job service.

        Args:
            db: AsyncSession for database operations
        """
        self.db = db

    async def get_job_status(self, job_id: UUID) -> JobModel:
        """
        Get the current job row for polling.

        Args:
            job_id: Job UUID

        Returns:
            JobModel: Job with status, progress and message

        Raises:
            JobNotFoundError: If job doesn't exist
        """
        job = await job_crud.get_by_id(self.db, job_id)
        if job is None:
            raise JobNotFoundError(str(job_id))
        return job

