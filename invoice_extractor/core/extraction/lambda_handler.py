"""
Lambda handler for SQS-triggered extraction jobs.

Consumes JobMessage bodies published by the API in sqs dispatch mode,
downloads each referenced invoice from S3 and runs the job pipeline.
A document that cannot be downloaded is handed to the pipeline without
content and is recorded as a per-document failure.

Environment variables:
- POSTGRES_URL or POSTGRES_*: database connection
- S3_DOCUMENTS_BUCKET, S3_DOCUMENTS_REGION: document bucket
- LLM_GOOGLE_API_KEY or GOOGLE_API_KEY: Gemini access
- LOG_LEVEL: Logging level

Dependencies: boto3, sqlalchemy, python-dotenv, job_pipeline
System role: Lambda entry point for queued extraction
"""

import asyncio
import json
import logging
from typing import Any, Dict

from dotenv import load_dotenv
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import NullPool

# Load environment variables from .env if present
load_dotenv()

from invoice_extractor.boundary.aws.s3_client import S3DocumentClient  # noqa: E402
from invoice_extractor.boundary.db.connection import get_async_session_factory  # noqa: E402
from invoice_extractor.configs import get_settings  # noqa: E402
from invoice_extractor.core.exceptions import StorageError  # noqa: E402
from invoice_extractor.observability.correlation import clear_correlation_id, set_correlation_id  # noqa: E402
from invoice_extractor.observability.logger import configure_logging  # noqa: E402

from .job_pipeline import JobPipeline  # noqa: E402
from .models import DocumentPayload, JobMessage, QueuedDocument  # noqa: E402

logger = logging.getLogger(__name__)


class MessageParseError(Exception):
    """Raised when an SQS message cannot be parsed."""

    pass


def parse_job_record(record: Dict[str, Any]) -> JobMessage:
    """
    Parse and validate one SQS record.

    Args:
        record: Single SQS record from event['Records']

    Returns:
        JobMessage: Validated job message

    Raises:
        MessageParseError: Empty body or schema mismatch
    """
    body = record.get("body")
    if not body:
        raise MessageParseError("Empty message body")

    try:
        message = JobMessage.model_validate_json(body)
    except PydanticValidationError as e:
        raise MessageParseError(f"Invalid job message: {e}") from e

    logger.info(
        f"{__name__}:parse_job_record - Parsed message",
        extra={
            "message_id": record.get("messageId"),
            "job_id": str(message.job_id),
            "document_count": len(message.documents),
        },
    )
    return message


async def load_document(storage: S3DocumentClient | None, queued: QueuedDocument) -> DocumentPayload:
    """
    Fetch one queued document's bytes.

    Args:
        storage: Document bucket client (None when storage is not configured)
        queued: Document reference from the message

    Returns:
        DocumentPayload: Payload, with empty content when the blob is unavailable
    """
    content = b""
    if queued.storage_path and storage is not None:
        try:
            content = await asyncio.to_thread(storage.download_bytes, queued.storage_path)
        except StorageError as e:
            logger.error(
                f"{__name__}:load_document - {e.message}",
                extra={"document_id": str(queued.document_id)},
            )
    else:
        logger.warning(
            f"{__name__}:load_document - Document was never stored or storage is not configured",
            extra={"document_id": str(queued.document_id)},
        )

    return DocumentPayload(
        filename=queued.filename,
        content=content,
        content_type=queued.content_type,
        document_id=queued.document_id,
    )


async def process_job_message(message: JobMessage, storage: S3DocumentClient | None = None) -> str:
    """
    Run the pipeline for one job message.

    Uses an engine without pooling since every record runs in its own event loop.

    Args:
        message: Parsed job message
        storage: Document bucket client (built from settings if None and configured)

    Returns:
        str: Terminal job status, or "skipped" if the job was not runnable
    """
    settings = get_settings()
    if storage is None and settings.s3_documents.is_configured:
        storage = S3DocumentClient(
            bucket=settings.s3_documents.bucket,
            region=settings.s3_documents.region,
            key_prefix=settings.s3_documents.key_prefix,
        )

    documents = [await load_document(storage, queued) for queued in message.documents]

    engine = create_async_engine(settings.database.async_database_url, poolclass=NullPool)
    try:
        pipeline = JobPipeline(get_async_session_factory(engine), settings=settings.extraction)
        job = await pipeline.run(message.job_id, documents, message.invoice_type)
    finally:
        await engine.dispose()

    return job.status.value if job is not None else "skipped"


def handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Lambda handler for SQS extraction events.

    Processes each record sequentially. Unparseable records are reported and
    skipped; they do not stop the batch.

    Args:
        event: SQS event with Records array
        context: Lambda context object

    Returns:
        Dict with statusCode and per-record results
    """
    configure_logging(get_settings().log_level)
    records = event.get("Records", [])
    logger.info(f"{__name__}:handler - Received SQS event", extra={"record_count": len(records)})

    results = []
    failed_count = 0

    for record in records:
        message_id = record.get("messageId")
        set_correlation_id(message_id)
        try:
            message = parse_job_record(record)
            set_correlation_id(str(message.job_id))
            status = asyncio.run(process_job_message(message))
            results.append({
                "messageId": message_id,
                "status": status,
                "job_id": str(message.job_id),
            })
            if status != "done":
                failed_count += 1

        except MessageParseError as e:
            logger.warning(f"{__name__}:handler - MessageParseError: {e}")
            failed_count += 1
            results.append({
                "messageId": message_id,
                "status": "failed",
                "error": "Invalid message format",
                "details": str(e),
            })

        except Exception as e:
            logger.exception(f"{__name__}:handler - {type(e).__name__}: {e}")
            failed_count += 1
            results.append({
                "messageId": message_id,
                "status": "failed",
                "error": "Unexpected error",
                "details": str(e),
            })

        finally:
            clear_correlation_id()

    # 200 even with partial failures; jobs record their own terminal state
    status_code = 200 if failed_count == 0 else 206
    logger.info(
        f"{__name__}:handler - Processing complete",
        extra={"success_count": len(results) - failed_count, "failed_count": failed_count},
    )

    return {
        "statusCode": status_code,
        "body": json.dumps({
            "processed": len(results),
            "failed": failed_count,
            "results": results,
        }),
    }
