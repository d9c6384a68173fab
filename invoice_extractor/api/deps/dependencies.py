"""
Dependency injection container.

Factory functions for FastAPI dependencies.

Dependencies: invoice_extractor.configs, invoice_extractor.application, invoice_extractor.boundary
System role: DI container for service injection
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from invoice_extractor.application.services import (
    BackgroundJobDispatcher,
    ChatService,
    IngestionService,
    JobDispatcher,
    JobService,
    ResultService,
    SqsJobDispatcher,
    SynonymService,
)
from invoice_extractor.boundary.aws.s3_client import S3DocumentClient
from invoice_extractor.boundary.db import get_async_db
from invoice_extractor.configs import Settings, get_settings


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self):
        self._chat_agent = None
        self._s3_client = None
        self._dispatcher = None

    @property
    def chat_agent(self):
        """Get cached invoice chat agent."""
        if self._chat_agent is None:
            from invoice_extractor.core.chat import InvoiceChatAgent

            llm = get_settings().llm
            self._chat_agent = InvoiceChatAgent(
                model_id=llm.chat_model,
                temperature=llm.chat_temperature,
                max_tokens=llm.chat_max_tokens,
                timeout=llm.request_timeout,
                api_key=llm.google_api_key,
            )
        return self._chat_agent

    @property
    def s3_client(self):
        """Get cached S3 document client (None when storage is disabled)."""
        settings = get_settings().s3_documents
        if not settings.is_configured:
            return None
        if self._s3_client is None:
            self._s3_client = S3DocumentClient(
                bucket=settings.bucket,
                region=settings.region,
                key_prefix=settings.key_prefix,
            )
        return self._s3_client

    @property
    def dispatcher(self) -> JobDispatcher:
        """Get cached job dispatcher for the configured dispatch mode."""
        if self._dispatcher is None:
            settings = get_settings()
            if settings.extraction.dispatch_mode == "sqs":
                from invoice_extractor.boundary.aws.sqs_client import JobQueuePublisher

                if not settings.extraction.queue_url:
                    raise ValueError("EXTRACTION_QUEUE_URL is required for sqs dispatch mode")
                self._dispatcher = SqsJobDispatcher(
                    JobQueuePublisher(
                        queue_url=settings.extraction.queue_url,
                        region=settings.extraction.queue_region,
                    )
                )
            else:
                from invoice_extractor.boundary.db.connection import get_async_session_factory
                from invoice_extractor.core.extraction.job_pipeline import JobPipeline

                self._dispatcher = BackgroundJobDispatcher(
                    lambda: JobPipeline(
                        get_async_session_factory(), settings=settings.extraction
                    )
                )
        return self._dispatcher

    def clear(self) -> None:
        """Clear all cached instances."""
        self._chat_agent = None
        self._s3_client = None
        self._dispatcher = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_s3_document_client() -> S3DocumentClient | None:
    """
    Get S3 document client for best-effort upload storage.

    Returns:
        S3DocumentClient | None: Client for document bucket operations, None if disabled
    """
    return get_service_cache().s3_client


def get_job_dispatcher() -> JobDispatcher:
    """
    Get the job dispatcher.

    Returns:
        JobDispatcher: Background or SQS dispatcher per EXTRACTION_DISPATCH_MODE
    """
    return get_service_cache().dispatcher


def get_job_service(db: AsyncSession = Depends(get_async_db)) -> JobService:
    """
    Get job service instance.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        JobService: Job service instance
    """
    return JobService(db=db)


def get_ingestion_service(
    db: AsyncSession = Depends(get_async_db),
    storage: S3DocumentClient | None = Depends(get_s3_document_client),
) -> IngestionService:
    """
    Get ingestion service instance.

    Args:
        db: Async database session (injected via Depends)
        storage: Document bucket client (injected, None if disabled)

    Returns:
        IngestionService: Ingestion service instance
    """
    return IngestionService(db=db, storage=storage, settings=get_settings().extraction)


def get_result_service(db: AsyncSession = Depends(get_async_db)) -> ResultService:
    """Get result service instance."""
    return ResultService(db=db)


def get_synonym_service(db: AsyncSession = Depends(get_async_db)) -> SynonymService:
    """Get synonym service instance."""
    return SynonymService(db=db)


def get_chat_service(db: AsyncSession = Depends(get_async_db)) -> ChatService:
    """
    Get chat service instance with the invoice chat agent.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        ChatService: Chat service with configured agent
    """
    return ChatService(db=db, chat_agent=get_service_cache().chat_agent)
