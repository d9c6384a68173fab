"""
History API endpoints.

Routes: GET /history/chat, GET /history/documents

Dependencies: invoice_extractor.application, invoice_extractor.models
System role: Chat and document history HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query

from invoice_extractor.api.deps import get_chat_service, get_result_service
from invoice_extractor.api.routers.error_handling import handle_domain_errors
from invoice_extractor.application.services.chat_service import ChatService
from invoice_extractor.application.services.result_service import ResultService
from invoice_extractor.models.chat import ChatExchangeResponse
from invoice_extractor.models.document import DocumentHistoryResponse

router = APIRouter(prefix="/history", tags=["history"])


@router.get("/chat", response_model=list[ChatExchangeResponse])
@handle_domain_errors
async def get_chat_history(
    job_id: UUID | None = Query(default=None),
    limit: int = Query(default=100, ge=1, le=500),
    chat_service: ChatService = Depends(get_chat_service),
) -> list[ChatExchangeResponse]:
    """Stored chat exchanges, newest first, optionally for one job."""
    exchanges = await chat_service.get_history(job_id=job_id, limit=limit)
    return [ChatExchangeResponse.model_validate(exchange) for exchange in exchanges]


@router.get("/documents", response_model=list[DocumentHistoryResponse])
@handle_domain_errors
async def get_document_history(
    limit: int = Query(default=50, ge=1, le=500),
    result_service: ResultService = Depends(get_result_service),
) -> list[DocumentHistoryResponse]:
    """Recently uploaded documents with their job status and record count."""
    history = await result_service.get_document_history(limit=limit)
    return [
        DocumentHistoryResponse(
            id=document.id,
            job_id=document.job_id,
            name=document.name,
            size_bytes=document.size_bytes,
            content_type=document.content_type,
            status=document.status.value,
            error_message=document.error_message,
            job_status=job_status.value if job_status is not None else None,
            record_count=record_count,
            created_at=document.created_at,
        )
        for document, job_status, record_count in history
    ]
