"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    get_chat_service,
    get_ingestion_service,
    get_job_dispatcher,
    get_job_service,
    get_result_service,
    get_s3_document_client,
    get_service_cache,
    get_settings_dependency,
    get_synonym_service,
)

__all__ = [
    "get_chat_service",
    "get_ingestion_service",
    "get_job_dispatcher",
    "get_job_service",
    "get_result_service",
    "get_s3_document_client",
    "get_service_cache",
    "get_settings_dependency",
    "get_synonym_service",
]
