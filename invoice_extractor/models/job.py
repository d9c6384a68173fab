"""
Job domain models and schemas.

Request/response schemas for job submission and tracking.

Dependencies: pydantic
System role: Job status API contracts
"""

import uuid
from datetime import datetime

from pydantic import Field

from invoice_extractor.models.common import ApiModel


class JobCreatedResponse(ApiModel):
    """Response schema for a submitted ingestion job."""

    job_id: uuid.UUID
    status: str
    message: str = Field(description="Where to poll for progress")


class JobStatusResponse(ApiModel):
    """Response schema for job status polling."""

    id: uuid.UUID
    invoice_type: str
    status: str
    progress: int = Field(ge=0, le=100, description="Progress percentage (0-100)")
    message: str | None = None
    documents_processed: int = 0
    total_records: int = 0
    created_at: datetime
    updated_at: datetime
