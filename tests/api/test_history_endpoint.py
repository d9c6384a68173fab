"""
Tests for the history endpoints.

System role: Verification of chat and document history listings
"""

import uuid
from datetime import datetime, timezone
from unittest.mock import AsyncMock

from invoice_extractor.api.deps import get_chat_service, get_result_service
from invoice_extractor.boundary.db.models.chat_history_model import ChatHistoryModel
from invoice_extractor.boundary.db.models.document_model import DocumentModel, DocumentStatus
from invoice_extractor.boundary.db.models.job_model import JobStatus


def test_chat_history(client):
    # Arrange
    job_id = uuid.uuid4()
    service = AsyncMock()
    service.get_history.return_value = [
        ChatHistoryModel(
            id=uuid.uuid4(),
            job_id=job_id,
            question="What is the subtotal?",
            answer="1000.00",
            created_at=datetime.now(timezone.utc),
        )
    ]
    client.app.dependency_overrides[get_chat_service] = lambda: service

    # Act
    response = client.get("/api/v1/history/chat", params={"job_id": str(job_id), "limit": 10})

    # Assert
    assert response.status_code == 200
    assert response.json()[0]["question"] == "What is the subtotal?"
    service.get_history.assert_awaited_once_with(job_id=job_id, limit=10)


def test_document_history(client):
    # Arrange
    service = AsyncMock()
    document = DocumentModel(
        id=uuid.uuid4(),
        job_id=uuid.uuid4(),
        name="invoice.pdf",
        size_bytes=2048,
        content_type="application/pdf",
        status=DocumentStatus.PROCESSED,
        created_at=datetime.now(timezone.utc),
    )
    service.get_document_history.return_value = [(document, JobStatus.DONE, 3)]
    client.app.dependency_overrides[get_result_service] = lambda: service

    # Act
    response = client.get("/api/v1/history/documents")

    # Assert
    assert response.status_code == 200
    [row] = response.json()
    assert row["name"] == "invoice.pdf"
    assert row["status"] == "processed"
    assert row["jobStatus"] == "done"
    assert row["recordCount"] == 3
