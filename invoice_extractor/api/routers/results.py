"""
Result API endpoints.

Routes: GET /results/{job_id}

Dependencies: invoice_extractor.application.result_service, invoice_extractor.models
System role: Extraction result HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from invoice_extractor.api.deps import get_result_service
from invoice_extractor.api.routers.error_handling import handle_domain_errors
from invoice_extractor.application.services.result_service import ResultService
from invoice_extractor.models.result import ResultResponse

router = APIRouter(prefix="/results", tags=["results"])


@router.get("/{job_id}", response_model=list[ResultResponse])
@handle_domain_errors
async def get_results(
    job_id: UUID,
    result_service: ResultService = Depends(get_result_service),
) -> list[ResultResponse]:
    """
    Get the canonicalized records extracted by a job.

    Returns an empty list while the job is still running or when nothing
    was extracted.

    Raises:
        HTTPException(404): Job not found
    """
    results = await result_service.get_results(job_id)
    return [ResultResponse.model_validate(result) for result in results]
