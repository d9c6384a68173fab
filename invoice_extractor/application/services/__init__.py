"""Service orchestrators."""

from .chat_service import ChatService
from .ingestion_service import IngestionService
from .job_dispatcher import (
    BackgroundJobDispatcher,
    IngestedJob,
    JobDispatcher,
    SqsJobDispatcher,
)
from .job_service import JobService
from .result_service import ResultService
from .synonym_service import SynonymService

__all__ = [
    "BackgroundJobDispatcher",
    "ChatService",
    "IngestedJob",
    "IngestionService",
    "JobDispatcher",
    "JobService",
    "ResultService",
    "SqsJobDispatcher",
    "SynonymService",
]
