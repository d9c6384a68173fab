"""
Chat history CRUD operations.

Persists question/answer exchanges and reads back the most recent ones as
conversation context for follow-up questions.

Dependencies: sqlalchemy, invoice_extractor.boundary.db.models
System role: Chat exchange persistence
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from invoice_extractor.boundary.db.CRUD.base_crud import BaseCRUD
from invoice_extractor.boundary.db.models.chat_history_model import ChatHistoryModel


class ChatHistoryCRUD(BaseCRUD[ChatHistoryModel]):
    """CRUD operations for ChatHistoryModel."""

    def __init__(self) -> None:
        super().__init__(ChatHistoryModel)

    async def add_exchange(
        self,
        session: AsyncSession,
        job_id: UUID | None,
        question: str,
        answer: str,
    ) -> ChatHistoryModel:
        """
        Store one question and its answer.

        Args:
            session: Async database session
            job_id: Job the question was asked about
            question: User question
            answer: Model answer

        Returns:
            Created ChatHistoryModel
        """
        return await self.create(session, job_id=job_id, question=question, answer=answer)

    async def get_recent(
        self,
        session: AsyncSession,
        job_id: UUID | None = None,
        limit: int | None = None,
    ) -> Sequence[ChatHistoryModel]:
        """
        Retrieve exchanges newest first, optionally scoped to one job.

        Args:
            session: Async database session
            job_id: Job UUID filter (None for all jobs)
            limit: Maximum number of exchanges

        Returns:
            Sequence of ChatHistoryModels
        """
        stmt = select(ChatHistoryModel).order_by(ChatHistoryModel.created_at.desc())
        if job_id is not None:
            stmt = stmt.where(ChatHistoryModel.job_id == job_id)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()


chat_history_crud = ChatHistoryCRUD()
