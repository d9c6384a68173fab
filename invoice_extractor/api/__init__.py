"""
API routes module.

FastAPI routers for all HTTP endpoints.
"""

from fastapi import APIRouter

from .routers import (
    chat_router,
    health_router,
    history_router,
    ingest_router,
    jobs_router,
    results_router,
    synonyms_router,
)

api_router = APIRouter()

# Include all routers
api_router.include_router(health_router)
api_router.include_router(ingest_router)
api_router.include_router(jobs_router)
api_router.include_router(results_router)
api_router.include_router(synonyms_router)
api_router.include_router(chat_router)
api_router.include_router(history_router)

__all__ = ["api_router"]
