"""
Integration tests for chat history CRUD.

System role: Verification of exchange storage and recency ordering
"""

from datetime import datetime, timedelta, timezone

import pytest

from invoice_extractor.boundary.db.CRUD.chat_history_crud import chat_history_crud
from invoice_extractor.boundary.db.CRUD.job_crud import job_crud
from invoice_extractor.boundary.db.models.job_model import InvoiceType


@pytest.mark.asyncio
async def test_recent_exchanges_are_newest_first_and_job_scoped(test_async_db) -> None:
    # Arrange
    now = datetime.now(timezone.utc)
    job = await job_crud.create_queued(test_async_db, InvoiceType.REGULAR)
    other = await job_crud.create_queued(test_async_db, InvoiceType.REGULAR)
    for minutes, question in [(3, "first"), (2, "second"), (1, "third")]:
        await chat_history_crud.create(
            test_async_db,
            job_id=job.id,
            question=question,
            answer="a",
            created_at=now - timedelta(minutes=minutes),
        )
    await chat_history_crud.add_exchange(test_async_db, other.id, "elsewhere", "b")

    # Act
    recent = await chat_history_crud.get_recent(test_async_db, job_id=job.id, limit=2)
    everything = await chat_history_crud.get_recent(test_async_db)

    # Assert
    assert [exchange.question for exchange in recent] == ["third", "second"]
    assert len(everything) == 4
