"""
Synonym domain models and schemas.

Request/response schemas for synonym management.

Dependencies: pydantic
System role: Synonym API contracts
"""

import uuid
from datetime import datetime

from pydantic import Field

from invoice_extractor.models.common import ApiModel


class SynonymRequest(ApiModel):
    """Request schema for creating or editing a synonym."""

    term: str = Field(min_length=1, max_length=255, description="Invoice label")
    canonical: str = Field(min_length=1, max_length=255, description="Canonical field name")


class SynonymResponse(ApiModel):
    """Response schema for a synonym."""

    id: uuid.UUID
    term: str
    canonical: str
    created_at: datetime
    updated_at: datetime
