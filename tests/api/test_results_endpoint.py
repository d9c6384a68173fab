"""
Tests for the results endpoint.

System role: Verification of result listing over HTTP
"""

import uuid
from datetime import datetime, timezone
from unittest.mock import AsyncMock

from invoice_extractor.api.deps import get_result_service
from invoice_extractor.boundary.db.models.result_model import ResultModel
from invoice_extractor.core.exceptions import JobNotFoundError


def test_get_results(client):
    # Arrange
    job_id = uuid.uuid4()
    service = AsyncMock()
    service.get_results.return_value = [
        ResultModel(
            id=uuid.uuid4(),
            job_id=job_id,
            doc_id=None,
            doc_name="invoice.pdf",
            page=1,
            original_term="Sub Total",
            canonical="Subtotal",
            value="1000.00",
            confidence=95,
            evidence="Sub Total $1,000.00",
            created_at=datetime.now(timezone.utc),
        )
    ]
    client.app.dependency_overrides[get_result_service] = lambda: service

    # Act
    response = client.get(f"/api/v1/results/{job_id}")

    # Assert
    assert response.status_code == 200
    [row] = response.json()
    assert row["originalTerm"] == "Sub Total"
    assert row["canonical"] == "Subtotal"
    assert row["value"] == "1000.00"
    assert row["docName"] == "invoice.pdf"
    assert row["confidence"] == 95


def test_results_of_unknown_job(client):
    service = AsyncMock()
    service.get_results.side_effect = JobNotFoundError("missing")
    client.app.dependency_overrides[get_result_service] = lambda: service

    response = client.get(f"/api/v1/results/{uuid.uuid4()}")

    assert response.status_code == 404
