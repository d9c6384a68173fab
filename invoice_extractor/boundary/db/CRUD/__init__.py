"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from invoice_extractor.boundary.db.CRUD import job_crud, synonym_crud

    job = await job_crud.get_by_id(db, job_id)
    synonyms = await synonym_crud.list_all(db)
"""

from invoice_extractor.boundary.db.CRUD.base_crud import BaseCRUD
from invoice_extractor.boundary.db.CRUD.chat_history_crud import ChatHistoryCRUD, chat_history_crud
from invoice_extractor.boundary.db.CRUD.document_crud import DocumentCRUD, document_crud
from invoice_extractor.boundary.db.CRUD.job_crud import JobCRUD, job_crud
from invoice_extractor.boundary.db.CRUD.result_crud import ResultCRUD, result_crud
from invoice_extractor.boundary.db.CRUD.synonym_crud import SynonymCRUD, synonym_crud

__all__ = [
    "BaseCRUD",
    "ChatHistoryCRUD",
    "chat_history_crud",
    "DocumentCRUD",
    "document_crud",
    "JobCRUD",
    "job_crud",
    "ResultCRUD",
    "result_crud",
    "SynonymCRUD",
    "synonym_crud",
]
