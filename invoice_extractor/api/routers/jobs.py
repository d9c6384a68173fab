"""
Job API endpoints.

Routes: GET /jobs/{id}

Dependencies: invoice_extractor.application.job_service, invoice_extractor.models
System role: Job status HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from invoice_extractor.api.deps import get_job_service
from invoice_extractor.api.routers.error_handling import handle_domain_errors
from invoice_extractor.application.services.job_service import JobService
from invoice_extractor.boundary.db.models.job_model import JobModel
from invoice_extractor.models.job import JobStatusResponse

router = APIRouter(prefix="/jobs", tags=["jobs"])


def to_job_response(job: JobModel) -> JobStatusResponse:
    return JobStatusResponse(
        id=job.id,
        invoice_type=job.invoice_type.value,
        status=job.status.value,
        progress=job.progress,
        message=job.message,
        documents_processed=job.documents_processed,
        total_records=job.total_records,
        created_at=job.created_at,
        updated_at=job.updated_at,
    )


@router.get("/{job_id}", response_model=JobStatusResponse)
@handle_domain_errors
async def get_job_status(
    job_id: UUID,
    job_service: JobService = Depends(get_job_service),
) -> JobStatusResponse:
    """
    Get job status and progress for frontend polling.

    Frontend should poll this endpoint every 1-2 seconds while the job is
    queued or running.

    Args:
        job_id: Job UUID
        job_service: Injected JobService

    Returns:
        JobStatusResponse: Status, progress percentage and message

    Raises:
        HTTPException(404): Job not found

    Example Response:
        {
            "id": "123e4567-e89b-12d3-a456-426614174000",
            "invoiceType": "regular",
            "status": "running",
            "progress": 40,
            "message": "Extracting data from invoice-0042.pdf (1/2)...",
            "documentsProcessed": 0,
            "totalRecords": 0,
            "createdAt": "2025-01-01T12:00:00",
            "updatedAt": "2025-01-01T12:00:05"
        }
    """
    job = await job_service.get_job_status(job_id)
    return to_job_response(job)
