"""
Document domain models and schemas.

Response schemas for the document history listing.

Dependencies: pydantic
System role: Document API contracts
"""

import uuid
from datetime import datetime

from invoice_extractor.models.common import ApiModel


class DocumentHistoryResponse(ApiModel):
    """One uploaded document with its job outcome."""

    id: uuid.UUID
    job_id: uuid.UUID | None = None
    name: str
    size_bytes: int
    content_type: str | None = None
    status: str
    error_message: str | None = None
    job_status: str | None = None
    record_count: int = 0
    created_at: datetime
