"""
Chat service for Q&A over extracted invoice data.

Orchestrates the chat flow: job validation, result and history retrieval,
agent invocation and exchange persistence.

Dependencies: invoice_extractor.core.chat, invoice_extractor.boundary.db
System role: Chat service orchestration layer
"""

import logging
from typing import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from invoice_extractor.boundary.db.CRUD.chat_history_crud import chat_history_crud
from invoice_extractor.boundary.db.CRUD.job_crud import job_crud
from invoice_extractor.boundary.db.CRUD.result_crud import result_crud
from invoice_extractor.boundary.db.models.chat_history_model import ChatHistoryModel
from invoice_extractor.core.chat.invoice_chat_agent import (
    MAX_CONVERSATION_HISTORY,
    InvoiceChatAgent,
)
from invoice_extractor.core.exceptions import JobNotFoundError, ValidationError

logger = logging.getLogger(__name__)


class ChatService:
    """
    Chat service for conversational Q&A.

    Coordinates job validation, result loading, agent invocation and
    history persistence for multi-turn conversations about one job.
    """

    def __init__(
        self,
        db: AsyncSession,
        chat_agent: InvoiceChatAgent,
    ) -> None:
        """
        Initialize chat service.

        Args:
            db: AsyncSession for database operations
            chat_agent: Agent answering questions over results
        """
        self.db = db
        self.chat_agent = chat_agent

    async def ask(self, job_id: UUID, question: str) -> str:
        """
        Answer a question about a job's extracted data.

        Flow:
        1. Validate job exists
        2. Load the job's results and its last exchanges
        3. Invoke the agent
        4. Persist the exchange (only when there was data to answer from)

        Args:
            job_id: Job UUID
            question: User question

        Returns:
            str: Answer text

        Raises:
            ValidationError: Empty question
            JobNotFoundError: If job doesn't exist
            ExtractionServiceError: If the model call fails
        """
        question = (question or "").strip()
        if not question:
            raise ValidationError("Question is required", field="question")

        if not await job_crud.exists(self.db, job_id):
            raise JobNotFoundError(str(job_id))

        results = await result_crud.get_by_job_id(self.db, job_id)
        history = await chat_history_crud.get_recent(
            self.db, job_id=job_id, limit=MAX_CONVERSATION_HISTORY
        )

        answer = await self.chat_agent.answer(question, results, history)

        if results:
            await chat_history_crud.add_exchange(self.db, job_id, question, answer)
            await self.db.commit()

        logger.info(
            f"{__name__}:ask - Answered",
            extra={"job_id": str(job_id), "result_count": len(results)},
        )
        return answer

    async def get_history(
        self,
        job_id: UUID | None = None,
        limit: int = 100,
    ) -> Sequence[ChatHistoryModel]:
        """
        Get stored exchanges, newest first.

        Args:
            job_id: Optional job filter
            limit: Maximum number of exchanges

        Returns:
            Sequence of ChatHistoryModels
        """
        return await chat_history_crud.get_recent(self.db, job_id=job_id, limit=limit)
