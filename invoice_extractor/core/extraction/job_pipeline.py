"""
Job pipeline orchestrator.

Drives one ingestion job from QUEUED to a terminal state:

    QUEUED -> RUNNING (5%, initializing)
           -> per-document progress (10% + 60% * current/total)
           -> 75% mapping -> 85% saving -> 95% finalizing
           -> DONE (100%, summary)
    any unrecoverable step -> ERROR ("Processing failed: ...")

Per-document failures stay inside the batch runner. Synonym snapshot loading
and the Result bulk insert are fatal. The pipeline opens its own sessions and
commits every progress update so polling clients see it immediately.

Dependencies: sqlalchemy, invoice_extractor.boundary.db, batch_runner, canonicalizer
System role: Orchestration of the extraction pipeline (coordinates only)
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Sequence
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from invoice_extractor.boundary.db.CRUD.document_crud import document_crud
from invoice_extractor.boundary.db.CRUD.job_crud import job_crud
from invoice_extractor.boundary.db.CRUD.result_crud import result_crud
from invoice_extractor.boundary.db.CRUD.synonym_crud import synonym_crud
from invoice_extractor.boundary.db.models.document_model import DocumentStatus
from invoice_extractor.boundary.db.models.job_model import InvoiceType, JobModel
from invoice_extractor.core.exceptions import NoTextFoundError, user_message
from invoice_extractor.observability.log_utils import log_exception_with_context

from .batch_runner import BatchRunner
from .canonicalizer import SynonymSnapshot, build_synonym_snapshot, canonicalize
from .configs import ExtractionPipelineSettings, get_pipeline_settings
from .extractor_adapter import BaseExtractor, get_extractor
from .models import DocumentPayload, ExtractionResult

logger = logging.getLogger(__name__)

ExtractorFactory = Callable[[InvoiceType], BaseExtractor]

PROGRESS_RUNNING = 5
PROGRESS_BATCH_START = 10
PROGRESS_BATCH_SPAN = 60
PROGRESS_MAPPING = 75
PROGRESS_SAVING = 85
PROGRESS_FINALIZING = 95

MESSAGE_INITIALIZING = "Initializing extraction engine..."
MESSAGE_MAPPING = "Mapping extracted terms to canonical fields..."
MESSAGE_SAVING = "Saving extracted data..."
MESSAGE_FINALIZING = "Finalizing..."
FAILURE_PREFIX = "Processing failed: "
DATABASE_ERROR_MESSAGE = "database error"


def batch_progress(current: int, total: int) -> int:
    """Job progress after `current` of `total` documents (10..70)."""
    if total <= 0:
        return PROGRESS_BATCH_START
    return PROGRESS_BATCH_START + (current * PROGRESS_BATCH_SPAN) // total


def failure_message(exc: BaseException) -> str:
    """User-facing job message for an aborted run (no SQL, ids or traces)."""
    if isinstance(exc, SQLAlchemyError):
        return FAILURE_PREFIX + DATABASE_ERROR_MESSAGE
    return FAILURE_PREFIX + user_message(exc)


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"


def summary_message(results: Sequence[ExtractionResult], total_records: int) -> str:
    """
    Completion message for a finished job.

    Args:
        results: Batch results
        total_records: Persisted record count

    Returns:
        str: Summary, with notes on failed and scanned documents
    """
    documents = _plural(len(results), "document")
    if total_records:
        message = f"Successfully extracted {_plural(total_records, 'financial term')} from {documents}"
    else:
        message = f"No financial terms found in {documents}"

    failed = [result for result in results if result.failed]
    if failed:
        message += f" ({len(failed)} of {len(results)} could not be processed)"
    if any(result.error_type == NoTextFoundError.__name__ for result in failed):
        message += ". Scanned PDFs have no text layer; upload them as handwritten invoices"
    return message


class JobPipeline:
    """Run extraction jobs and own every Job state transition."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        extractor_factory: ExtractorFactory = get_extractor,
        settings: ExtractionPipelineSettings | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        """
        Initialize pipeline.

        Args:
            session_factory: Factory for the pipeline's own database sessions
            extractor_factory: Builds the extractor for an invoice type
            settings: Pipeline settings (uses defaults if None)
            sleep: Awaitable used for the finalization delay
        """
        self._session_factory = session_factory
        self._extractor_factory = extractor_factory
        self._settings = settings or get_pipeline_settings()
        self._sleep = sleep

    async def _update_job(self, transition, job_id: UUID, **kwargs) -> JobModel | None:
        async with self._session_factory() as session:
            job = await transition(session, job_id, **kwargs)
            await session.commit()
            return job

    async def _load_synonyms(self) -> SynonymSnapshot:
        async with self._session_factory() as session:
            rows = await synonym_crud.list_all(session)
        return build_synonym_snapshot((row.term, row.canonical) for row in rows)

    def _assemble_rows(
        self,
        job_id: UUID,
        documents: Sequence[DocumentPayload],
        results: Sequence[ExtractionResult],
        synonyms: SynonymSnapshot,
    ) -> list[dict]:
        rows = []
        for document, result in zip(documents, results):
            if not result.results:
                logger.info(
                    f"{__name__}:run - No records for document, skipping",
                    extra={"job_id": str(job_id), "document_name": result.filename},
                )
                continue
            for record in result.results:
                rows.append({
                    "job_id": job_id,
                    "doc_id": document.document_id,
                    "doc_name": result.filename,
                    "page": record.page,
                    "original_term": record.term,
                    "canonical": canonicalize(record.term, synonyms),
                    "value": record.value,
                    "confidence": record.confidence,
                    "evidence": record.evidence,
                })
        return rows

    async def _persist(
        self,
        rows: list[dict],
        documents: Sequence[DocumentPayload],
        results: Sequence[ExtractionResult],
    ) -> None:
        async with self._session_factory() as session:
            async with session.begin():
                await result_crud.create_many(session, rows)
                for document, result in zip(documents, results):
                    if document.document_id is None:
                        continue
                    await document_crud.set_status(
                        session,
                        document.document_id,
                        DocumentStatus.FAILED if result.failed else DocumentStatus.PROCESSED,
                        error_message=result.error,
                    )

    async def run(
        self,
        job_id: UUID,
        documents: Sequence[DocumentPayload],
        invoice_type: InvoiceType | str = InvoiceType.REGULAR,
    ) -> JobModel | None:
        """
        Run a queued job to a terminal state.

        Never raises for pipeline failures: they are recorded on the job as
        ERROR with a human-readable message.

        Args:
            job_id: Job UUID (must be QUEUED)
            documents: Documents in submission order
            invoice_type: Extraction path

        Returns:
            JobModel | None: Terminal job, or None if the job was missing or
            already terminal
        """
        log_context = {"job_id": str(job_id), "document_count": len(documents)}

        job = await self._update_job(
            job_crud.mark_running, job_id, progress=PROGRESS_RUNNING, message=MESSAGE_INITIALIZING
        )
        if job is None:
            logger.warning(f"{__name__}:run - Job missing or already finished", extra=log_context)
            return None

        logger.info(f"{__name__}:run - START", extra=log_context)
        try:
            synonyms = await self._load_synonyms()

            async def on_progress(current: int, total: int, filename: str) -> None:
                await self._update_job(
                    job_crud.update_progress,
                    job_id,
                    progress=batch_progress(current, total),
                    message=f"Extracting data from {filename} ({current}/{total})...",
                )

            runner = BatchRunner(
                self._extractor_factory(InvoiceType(invoice_type)),
                concurrency=self._settings.batch_concurrency,
            )
            results = await runner.process_batch(documents, on_progress)

            await self._update_job(
                job_crud.update_progress, job_id, progress=PROGRESS_MAPPING, message=MESSAGE_MAPPING
            )
            rows = self._assemble_rows(job_id, documents, results, synonyms)

            await self._update_job(
                job_crud.update_progress, job_id, progress=PROGRESS_SAVING, message=MESSAGE_SAVING
            )
            await self._persist(rows, documents, results)

            await self._update_job(
                job_crud.update_progress,
                job_id,
                progress=PROGRESS_FINALIZING,
                message=MESSAGE_FINALIZING,
            )
            await self._sleep(self._settings.finalize_delay_seconds)

            job = await self._update_job(
                job_crud.mark_done,
                job_id,
                documents_processed=len(documents),
                total_records=len(rows),
                message=summary_message(results, len(rows)),
            )
        except Exception as e:
            log_exception_with_context(logger, f"{__name__}:run - FAILED", e, **log_context)
            return await self._fail(job_id, e)

        logger.info(
            f"{__name__}:run - END",
            extra={**log_context, "total_records": len(rows)},
        )
        return job

    async def _fail(self, job_id: UUID, exc: Exception) -> JobModel | None:
        try:
            return await self._update_job(job_crud.mark_error, job_id, message=failure_message(exc))
        except Exception as e:
            log_exception_with_context(
                logger, f"{__name__}:run - Could not record job failure", e, job_id=str(job_id)
            )
            return None
