"""
API request/response schemas.

Exports: job, result, synonym, chat and document history schemas
"""

from .chat import ChatExchangeResponse, ChatRequest, ChatResponse
from .common import ApiModel
from .document import DocumentHistoryResponse
from .job import JobCreatedResponse, JobStatusResponse
from .result import ResultResponse
from .synonym import SynonymRequest, SynonymResponse

__all__ = [
    "ApiModel",
    "ChatExchangeResponse",
    "ChatRequest",
    "ChatResponse",
    "DocumentHistoryResponse",
    "JobCreatedResponse",
    "JobStatusResponse",
    "ResultResponse",
    "SynonymRequest",
    "SynonymResponse",
]
