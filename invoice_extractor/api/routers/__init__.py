"""API routers."""

from .chat import router as chat_router
from .health import router as health_router
from .history import router as history_router
from .ingest import router as ingest_router
from .jobs import router as jobs_router
from .results import router as results_router
from .synonyms import router as synonyms_router

__all__ = [
    "chat_router",
    "health_router",
    "history_router",
    "ingest_router",
    "jobs_router",
    "results_router",
    "synonyms_router",
]
