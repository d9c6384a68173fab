"""
Synonym API endpoints.

Routes: GET /synonyms, POST /synonyms, PUT /synonyms/{id}, DELETE /synonyms/{id}

Dependencies: invoice_extractor.application.synonym_service, invoice_extractor.models
System role: Synonym management HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from invoice_extractor.api.deps import get_synonym_service
from invoice_extractor.api.routers.error_handling import handle_domain_errors
from invoice_extractor.application.services.synonym_service import SynonymService
from invoice_extractor.models.synonym import SynonymRequest, SynonymResponse

router = APIRouter(prefix="/synonyms", tags=["synonyms"])


@router.get("", response_model=list[SynonymResponse])
@handle_domain_errors
async def list_synonyms(
    synonym_service: SynonymService = Depends(get_synonym_service),
) -> list[SynonymResponse]:
    """List every synonym, newest first."""
    synonyms = await synonym_service.list_synonyms()
    return [SynonymResponse.model_validate(synonym) for synonym in synonyms]


@router.post("", response_model=SynonymResponse)
@handle_domain_errors
async def upsert_synonym(
    request: SynonymRequest,
    response: Response,
    synonym_service: SynonymService = Depends(get_synonym_service),
) -> SynonymResponse:
    """
    Add a synonym.

    An existing term (compared case-insensitively) is updated instead of
    duplicated: 201 when created, 200 when updated.

    Raises:
        HTTPException(400): Empty term or canonical name
    """
    synonym, created = await synonym_service.upsert_synonym(request.term, request.canonical)
    response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
    return SynonymResponse.model_validate(synonym)


@router.put("/{synonym_id}", response_model=SynonymResponse)
@handle_domain_errors
async def update_synonym(
    synonym_id: UUID,
    request: SynonymRequest,
    synonym_service: SynonymService = Depends(get_synonym_service),
) -> SynonymResponse:
    """
    Edit a synonym.

    Raises:
        HTTPException(404): Synonym not found
        HTTPException(409): Another synonym already uses the term
    """
    synonym = await synonym_service.update_synonym(synonym_id, request.term, request.canonical)
    return SynonymResponse.model_validate(synonym)


@router.delete("/{synonym_id}", status_code=status.HTTP_204_NO_CONTENT)
@handle_domain_errors
async def delete_synonym(
    synonym_id: UUID,
    synonym_service: SynonymService = Depends(get_synonym_service),
) -> Response:
    """
    Delete a synonym.

    Raises:
        HTTPException(404): Synonym not found
    """
    await synonym_service.delete_synonym(synonym_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
