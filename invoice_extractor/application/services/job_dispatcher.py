"""
Job dispatchers.

Hand a committed ingestion job to whatever runs the extraction pipeline:
FastAPI background tasks in-process, or an SQS message picked up by the
queue worker lambda.

Dependencies: fastapi, invoice_extractor.core.extraction, invoice_extractor.boundary.aws
System role: Bridge between ingestion and pipeline execution
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable

from fastapi import BackgroundTasks

from invoice_extractor.boundary.aws.sqs_client import JobQueuePublisher
from invoice_extractor.boundary.db.models.job_model import JobModel
from invoice_extractor.core.extraction.job_pipeline import JobPipeline
from invoice_extractor.core.extraction.models import DocumentPayload, JobMessage, QueuedDocument

logger = logging.getLogger(__name__)


@dataclass
class IngestedJob:
    """A queued job with its documents, ready for dispatch."""

    job: JobModel
    payloads: list[DocumentPayload] = field(default_factory=list)
    queued_documents: list[QueuedDocument] = field(default_factory=list)


class JobDispatcher(ABC):
    """Starts the pipeline for an ingested job."""

    @abstractmethod
    async def dispatch(self, background_tasks: BackgroundTasks, ingested: IngestedJob) -> None:
        """
        Schedule the job. Must not block on extraction.

        Raises:
            StorageError: If the job could not be handed off
        """


class BackgroundJobDispatcher(JobDispatcher):
    """Runs the pipeline as a FastAPI background task after the response is sent."""

    def __init__(self, pipeline_factory: Callable[[], JobPipeline]) -> None:
        self._pipeline_factory = pipeline_factory

    async def dispatch(self, background_tasks: BackgroundTasks, ingested: IngestedJob) -> None:
        job = ingested.job
        background_tasks.add_task(
            self._pipeline_factory().run,
            job.id,
            ingested.payloads,
            job.invoice_type,
        )
        logger.info(
            f"{__name__}:dispatch - Scheduled background run",
            extra={"job_id": str(job.id), "document_count": len(ingested.payloads)},
        )


class SqsJobDispatcher(JobDispatcher):
    """Publishes a job message for the queue worker."""

    def __init__(self, publisher: JobQueuePublisher) -> None:
        self._publisher = publisher

    async def dispatch(self, background_tasks: BackgroundTasks, ingested: IngestedJob) -> None:
        job = ingested.job
        message = JobMessage(
            job_id=job.id,
            invoice_type=job.invoice_type.value,
            documents=ingested.queued_documents,
        )
        message_id = await asyncio.to_thread(self._publisher.publish, message.model_dump_json())
        logger.info(
            f"{__name__}:dispatch - Published job message",
            extra={"job_id": str(job.id), "message_id": message_id},
        )
