"""
Chat API endpoints.

Routes: POST /chat

Dependencies: invoice_extractor.application.chat_service, invoice_extractor.models
System role: Chat HTTP API
"""

import logging

from fastapi import APIRouter, Depends

from invoice_extractor.api.deps import get_chat_service
from invoice_extractor.api.routers.error_handling import handle_domain_errors
from invoice_extractor.application.services.chat_service import ChatService
from invoice_extractor.models.chat import ChatRequest, ChatResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])


@router.post("", response_model=ChatResponse)
@handle_domain_errors
async def chat(
    request: ChatRequest,
    chat_service: ChatService = Depends(get_chat_service),
) -> ChatResponse:
    """
    Ask a question about a job's extracted financial data.

    Args:
        request: Job id and question
        chat_service: Injected ChatService

    Returns:
        ChatResponse: Answer text

    Raises:
        HTTPException(400): Empty question
        HTTPException(404): Job not found
        HTTPException(502): Completion service failed
    """
    logger.info("Chat request received", extra={"job_id": str(request.job_id)})
    answer = await chat_service.ask(request.job_id, request.question)
    return ChatResponse(answer=answer)
