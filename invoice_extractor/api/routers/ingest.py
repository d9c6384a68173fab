"""
Ingestion API endpoints.

Routes: POST /ingest, POST /ingest/handwritten

Dependencies: invoice_extractor.application.ingestion_service, invoice_extractor.models
System role: Invoice upload HTTP API
"""

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, File, UploadFile

from invoice_extractor.api.deps import get_ingestion_service, get_job_dispatcher
from invoice_extractor.api.routers.error_handling import handle_domain_errors
from invoice_extractor.application.services.ingestion_service import IngestionService
from invoice_extractor.application.services.job_dispatcher import JobDispatcher
from invoice_extractor.boundary.db.models.job_model import InvoiceType
from invoice_extractor.core.exceptions import StorageError
from invoice_extractor.core.extraction.models import DocumentPayload
from invoice_extractor.models.job import JobCreatedResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ingest", tags=["ingest"])


async def read_uploads(files: list[UploadFile] | None) -> list[DocumentPayload]:
    """Read multipart uploads fully into memory."""
    uploads = []
    for file in files or []:
        uploads.append(
            DocumentPayload(
                filename=file.filename or "",
                content=await file.read(),
                content_type=file.content_type,
            )
        )
    return uploads


async def submit_job(
    files: list[UploadFile] | None,
    invoice_type: InvoiceType,
    background_tasks: BackgroundTasks,
    ingestion_service: IngestionService,
    dispatcher: JobDispatcher,
) -> JobCreatedResponse:
    """
    Create a job for the uploaded files and dispatch it.

    The job is committed before dispatch so that polling can find it and
    the pipeline's own sessions see the rows.
    """
    uploads = await read_uploads(files)
    logger.info(
        "Ingestion request received",
        extra={"invoice_type": invoice_type.value, "document_count": len(uploads)},
    )

    ingested = await ingestion_service.create_job(uploads, invoice_type)
    job_id = ingested.job.id

    # Commit job creation immediately so polling can find it
    await ingestion_service.db.commit()

    try:
        await dispatcher.dispatch(background_tasks, ingested)
    except StorageError as e:
        await ingestion_service.mark_dispatch_failed(job_id, e)
        raise

    logger.info("Job created and dispatched", extra={"job_id": str(job_id)})
    return JobCreatedResponse(
        job_id=job_id,
        status=ingested.job.status.value,
        message=f"Processing {len(uploads)} document(s). Poll /jobs/{job_id} for status.",
    )


@router.post("", response_model=JobCreatedResponse)
@handle_domain_errors
async def ingest_documents(
    background_tasks: BackgroundTasks,
    files: list[UploadFile] | None = File(default=None),
    ingestion_service: IngestionService = Depends(get_ingestion_service),
    dispatcher: JobDispatcher = Depends(get_job_dispatcher),
) -> JobCreatedResponse:
    """
    Upload regular (text PDF) invoices for extraction (non-blocking).

    Args:
        background_tasks: FastAPI background tasks
        files: One or more PDF files (multipart field "files")
        ingestion_service: Injected IngestionService
        dispatcher: Injected JobDispatcher

    Returns:
        JobCreatedResponse: jobId and initial status for polling

    Raises:
        HTTPException(400): No files, file too large or not a PDF
        HTTPException(503): Job could not be queued
    """
    return await submit_job(
        files, InvoiceType.REGULAR, background_tasks, ingestion_service, dispatcher
    )


@router.post("/handwritten", response_model=JobCreatedResponse)
@handle_domain_errors
async def ingest_handwritten_documents(
    background_tasks: BackgroundTasks,
    files: list[UploadFile] | None = File(default=None),
    ingestion_service: IngestionService = Depends(get_ingestion_service),
    dispatcher: JobDispatcher = Depends(get_job_dispatcher),
) -> JobCreatedResponse:
    """
    Upload handwritten or scanned invoices for vision extraction.

    Accepts PDFs and images (png, jpg, jpeg, webp).

    Raises:
        HTTPException(400): No files, file too large or unsupported type
        HTTPException(503): Job could not be queued
    """
    return await submit_job(
        files, InvoiceType.HANDWRITTEN, background_tasks, ingestion_service, dispatcher
    )
