"""
Ingestion service orchestrator.

Validates uploaded invoices, creates the queued Job with one Document row per
file and stores each file in the document bucket. Storage is best-effort: a
failed upload leaves storage_path empty and the file is still extracted from
memory in background mode.

Dependencies: invoice_extractor.boundary.db, invoice_extractor.boundary.aws
System role: Job submission orchestration
"""

import asyncio
import logging
from pathlib import Path
from typing import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from invoice_extractor.application.services.job_dispatcher import IngestedJob
from invoice_extractor.boundary.aws.s3_client import S3DocumentClient
from invoice_extractor.boundary.db.CRUD.document_crud import document_crud
from invoice_extractor.boundary.db.CRUD.job_crud import job_crud
from invoice_extractor.boundary.db.models.document_model import DocumentStatus
from invoice_extractor.boundary.db.models.job_model import InvoiceType, JobModel
from invoice_extractor.core.exceptions import StorageError, ValidationError
from invoice_extractor.core.extraction.configs import (
    ExtractionPipelineSettings,
    get_pipeline_settings,
)
from invoice_extractor.core.extraction.extractor_adapter import MIME_TYPES_BY_EXTENSION
from invoice_extractor.core.extraction.job_pipeline import failure_message
from invoice_extractor.core.extraction.models import DocumentPayload, QueuedDocument

logger = logging.getLogger(__name__)

PDF_MIME_TYPE = "application/pdf"
IMAGE_MIME_TYPES = {"image/png", "image/jpeg", "image/jpg", "image/webp"}

ALLOWED_MIME_TYPES = {
    InvoiceType.REGULAR: {PDF_MIME_TYPE},
    InvoiceType.HANDWRITTEN: {PDF_MIME_TYPE} | IMAGE_MIME_TYPES,
}


def detect_content_type(filename: str, declared: str | None = None) -> str | None:
    """Declared MIME type when specific, else the one implied by the extension."""
    if declared and declared != "application/octet-stream":
        return declared.split(";")[0].strip().lower()
    return MIME_TYPES_BY_EXTENSION.get(Path(filename).suffix.lower())


def validate_upload(
    upload: DocumentPayload,
    invoice_type: InvoiceType,
    max_size_bytes: int,
) -> str:
    """
    Check one uploaded file against the rules of its invoice type.

    Args:
        upload: File as received
        invoice_type: Extraction path requested
        max_size_bytes: Per-file size limit

    Returns:
        str: Resolved content type

    Raises:
        ValidationError: Missing name, empty file, oversize or wrong type
    """
    if not upload.filename:
        raise ValidationError("Filename is required", field="files")

    if upload.size_bytes == 0:
        raise ValidationError(f"File '{upload.filename}' is empty", field="files")

    if upload.size_bytes > max_size_bytes:
        raise ValidationError(
            f"File '{upload.filename}' is too large. "
            f"Maximum size: {max_size_bytes // (1024 * 1024)}MB",
            field="files",
        )

    content_type = detect_content_type(upload.filename, upload.content_type)
    allowed = ALLOWED_MIME_TYPES[invoice_type]
    if content_type not in allowed:
        expected = "PDF" if invoice_type == InvoiceType.REGULAR else "PDF or image (png, jpg, jpeg, webp)"
        raise ValidationError(
            f"File '{upload.filename}' is not supported for {invoice_type.value} invoices. "
            f"Expected {expected}",
            field="files",
        )
    return content_type


class IngestionService:
    """
    Ingestion service orchestrator.

    Creates jobs and documents; the caller commits and dispatches.
    """

    def __init__(
        self,
        db: AsyncSession,
        storage: S3DocumentClient | None = None,
        settings: ExtractionPipelineSettings | None = None,
    ) -> None:
        """
        Initialize ingestion service.

        Args:
            db: AsyncSession for database operations
            storage: Document bucket client (None disables blob storage)
            settings: Pipeline settings (uses defaults if None)
        """
        self.db = db
        self._storage = storage
        self._settings = settings or get_pipeline_settings()

    async def _store(self, job_id: UUID, upload: DocumentPayload, content_type: str) -> str | None:
        if self._storage is None:
            return None

        key = self._storage.build_key(job_id, upload.filename)
        try:
            return await asyncio.to_thread(
                self._storage.upload_bytes, key, upload.content, content_type
            )
        except StorageError as e:
            logger.warning(
                f"{__name__}:create_job - Storage upload failed, continuing without blob",
                extra={"job_id": str(job_id), "document_name": upload.filename, "error": e.message},
            )
            return None

    async def create_job(
        self,
        uploads: Sequence[DocumentPayload],
        invoice_type: InvoiceType = InvoiceType.REGULAR,
    ) -> IngestedJob:
        """
        Validate uploads and create the queued job with its documents.

        Every file is validated before anything is written, so a rejected
        batch leaves no rows behind.

        Args:
            uploads: Uploaded files in submission order
            invoice_type: Extraction path for the whole batch

        Returns:
            IngestedJob: Job, payloads tagged with document ids, and queue references

        Raises:
            ValidationError: No files, or a file breaks the upload rules
        """
        if not uploads:
            raise ValidationError("No files uploaded", field="files")

        content_types = [
            validate_upload(upload, invoice_type, self._settings.max_file_size_bytes)
            for upload in uploads
        ]

        job = await job_crud.create_queued(
            self.db,
            invoice_type,
            message=f"Queued {len(uploads)} document{'s' if len(uploads) != 1 else ''} for extraction",
        )

        ingested = IngestedJob(job=job)
        for upload, content_type in zip(uploads, content_types):
            storage_path = await self._store(job.id, upload, content_type)
            document = await document_crud.create(
                self.db,
                job_id=job.id,
                name=upload.filename,
                size_bytes=upload.size_bytes,
                content_type=content_type,
                storage_path=storage_path,
                status=DocumentStatus.UPLOADED,
            )
            ingested.payloads.append(
                upload.model_copy(update={"document_id": document.id, "content_type": content_type})
            )
            ingested.queued_documents.append(
                QueuedDocument(
                    document_id=document.id,
                    filename=upload.filename,
                    storage_path=storage_path,
                    content_type=content_type,
                )
            )

        logger.info(
            f"{__name__}:create_job - Job created",
            extra={
                "job_id": str(job.id),
                "invoice_type": invoice_type.value,
                "document_count": len(uploads),
            },
        )
        return ingested

    async def mark_dispatch_failed(self, job_id: UUID, exc: Exception) -> JobModel | None:
        """
        Record that a committed job could not be handed to the pipeline.

        Args:
            job_id: Job UUID
            exc: Dispatch failure

        Returns:
            JobModel | None: Job in ERROR, or None if it was already terminal
        """
        job = await job_crud.mark_error(self.db, job_id, failure_message(exc))
        await self.db.commit()
        return job
