"""
Result service orchestrator.

Read side of extraction output: persisted results per job and the document
history listing.

Dependencies: invoice_extractor.boundary.db
System role: Result retrieval orchestration
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from invoice_extractor.boundary.db.CRUD.document_crud import document_crud
from invoice_extractor.boundary.db.CRUD.job_crud import job_crud
from invoice_extractor.boundary.db.CRUD.result_crud import result_crud
from invoice_extractor.boundary.db.models.document_model import DocumentModel
from invoice_extractor.boundary.db.models.job_model import JobStatus
from invoice_extractor.boundary.db.models.result_model import ResultModel
from invoice_extractor.core.exceptions import JobNotFoundError


class ResultService:
    """Result service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_results(self, job_id: UUID) -> Sequence[ResultModel]:
        """
        Get every persisted result of a job.

        A job that is still running simply has no rows yet.

        Args:
            job_id: Job UUID

        Returns:
            Sequence of ResultModels ordered by document, page and insertion

        Raises:
            JobNotFoundError: If job doesn't exist
        """
        if not await job_crud.exists(self.db, job_id):
            raise JobNotFoundError(str(job_id))
        return await result_crud.get_by_job_id(self.db, job_id)

    async def get_document_history(
        self,
        limit: int = 50,
    ) -> list[tuple[DocumentModel, JobStatus | None, int]]:
        """
        Get recently uploaded documents.

        Args:
            limit: Maximum number of documents

        Returns:
            List of (document, job status or None, record count), newest first
        """
        return await document_crud.get_history(self.db, limit=limit)
