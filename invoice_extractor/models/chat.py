"""
Chat domain models and schemas.

Request/response schemas for chat operations.

Dependencies: pydantic
System role: Chat API contracts
"""

import uuid
from datetime import datetime

from pydantic import Field

from invoice_extractor.models.common import ApiModel


class ChatRequest(ApiModel):
    """Request schema for chat questions."""

    job_id: uuid.UUID = Field(description="Job whose results are queried")
    question: str = Field(min_length=1, max_length=2000, description="User question")


class ChatResponse(ApiModel):
    """Response schema for chat answers."""

    answer: str


class ChatExchangeResponse(ApiModel):
    """Single stored question and answer."""

    id: uuid.UUID
    job_id: uuid.UUID | None = None
    question: str
    answer: str
    created_at: datetime
