"""
Result schemas.

Dependencies: pydantic
System role: Extraction result API contracts
"""

import uuid
from datetime import datetime

from invoice_extractor.models.common import ApiModel


class ResultResponse(ApiModel):
    """One canonicalized line item."""

    id: uuid.UUID
    job_id: uuid.UUID
    doc_id: uuid.UUID | None = None
    doc_name: str
    page: int
    original_term: str
    canonical: str
    value: str
    confidence: int
    evidence: str
    created_at: datetime
