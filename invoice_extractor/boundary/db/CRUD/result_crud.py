"""
Result CRUD operations.

Results are inserted in bulk once per job and read back for display and chat
context. There is no update path.

Dependencies: sqlalchemy, invoice_extractor.boundary.db.models
System role: Extraction result persistence
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from invoice_extractor.boundary.db.CRUD.base_crud import BaseCRUD
from invoice_extractor.boundary.db.models.result_model import ResultModel


class ResultCRUD(BaseCRUD[ResultModel]):
    """CRUD operations for ResultModel."""

    def __init__(self) -> None:
        super().__init__(ResultModel)

    async def get_by_job_id(
        self,
        session: AsyncSession,
        job_id: UUID,
        limit: int | None = None,
    ) -> Sequence[ResultModel]:
        """
        Retrieve a job's results grouped by document and page.

        Args:
            session: Async database session
            job_id: Job UUID
            limit: Maximum number of rows

        Returns:
            Sequence of ResultModels
        """
        stmt = (
            select(ResultModel)
            .where(ResultModel.job_id == job_id)
            .order_by(ResultModel.doc_name, ResultModel.page, ResultModel.created_at)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def count_by_job_id(self, session: AsyncSession, job_id: UUID) -> int:
        stmt = select(func.count(ResultModel.id)).where(ResultModel.job_id == job_id)
        result = await session.execute(stmt)
        return result.scalar_one()


result_crud = ResultCRUD()
