"""
Tests for the job polling endpoint.

System role: Verification of job status responses
"""

import uuid
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from invoice_extractor.api.deps import get_job_service
from invoice_extractor.boundary.db.models.job_model import InvoiceType, JobModel, JobStatus
from invoice_extractor.core.exceptions import JobNotFoundError


@pytest.fixture
def mock_job_service():
    return AsyncMock()


def test_get_job_status(client, mock_job_service):
    # Arrange
    job_id = uuid.uuid4()
    now = datetime.now(timezone.utc)
    mock_job_service.get_job_status.return_value = JobModel(
        id=job_id,
        invoice_type=InvoiceType.REGULAR,
        status=JobStatus.RUNNING,
        progress=40,
        message="Extracted 2/4: b.pdf",
        documents_processed=0,
        total_records=0,
        created_at=now,
        updated_at=now,
    )
    client.app.dependency_overrides[get_job_service] = lambda: mock_job_service

    # Act
    response = client.get(f"/api/v1/jobs/{job_id}")

    # Assert
    assert response.status_code == 200
    data = response.json()
    assert data["id"] == str(job_id)
    assert data["status"] == "running"
    assert data["invoiceType"] == "regular"
    assert data["progress"] == 40
    assert data["message"] == "Extracted 2/4: b.pdf"
    assert data["totalRecords"] == 0
    mock_job_service.get_job_status.assert_awaited_once_with(job_id)


def test_get_job_not_found(client, mock_job_service):
    job_id = uuid.uuid4()
    mock_job_service.get_job_status.side_effect = JobNotFoundError(str(job_id))
    client.app.dependency_overrides[get_job_service] = lambda: mock_job_service

    response = client.get(f"/api/v1/jobs/{job_id}")

    assert response.status_code == 404
    assert "not found" in response.json()["detail"].lower()


def test_invalid_job_id(client, mock_job_service):
    client.app.dependency_overrides[get_job_service] = lambda: mock_job_service

    response = client.get("/api/v1/jobs/not-a-uuid")

    assert response.status_code == 422
