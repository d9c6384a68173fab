"""
End-to-end tests for the job pipeline on an in-memory database.

The completion service and the PDF text layer are faked; persistence,
canonicalization and every job transition are real.

System role: Verification of job lifecycle and result persistence
"""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy import text
from sqlalchemy.exc import OperationalError

from invoice_extractor.boundary.db.CRUD.document_crud import document_crud
from invoice_extractor.boundary.db.CRUD.job_crud import job_crud
from invoice_extractor.boundary.db.CRUD.result_crud import result_crud
from invoice_extractor.boundary.db.CRUD.synonym_crud import synonym_crud
from invoice_extractor.boundary.db.models.document_model import DocumentStatus
from invoice_extractor.boundary.db.models.job_model import InvoiceType, JobStatus
from invoice_extractor.core.exceptions import NoTextFoundError
from invoice_extractor.core.extraction.extractor_adapter import TextExtractor
from invoice_extractor.core.extraction.job_pipeline import (
    JobPipeline,
    batch_progress,
    failure_message,
    summary_message,
)
from invoice_extractor.core.extraction.models import DocumentPayload, ExtractionResult
from invoice_extractor.core.extraction.tasks import PdfText

SUBTOTAL_RESPONSE = json.dumps([
    {"page": 1, "term": "Sub Total", "value": "$1,000.00", "evidence": "Sub Total $1,000.00", "confidence": 95},
])


async def seed_job(session_factory, filenames, synonyms=()):
    """Create a queued job with one document row per filename."""
    async with session_factory() as session:
        for term, canonical in synonyms:
            await synonym_crud.create(
                session, term=term, term_normalized=term.strip().lower(), canonical=canonical
            )
        job = await job_crud.create_queued(session, InvoiceType.REGULAR)
        payloads = []
        for filename in filenames:
            document = await document_crud.create(
                session, job_id=job.id, name=filename, size_bytes=8, content_type="application/pdf"
            )
            payloads.append(
                DocumentPayload(filename=filename, content=b"%PDF-1.4", document_id=document.id)
            )
        await session.commit()
    return job.id, payloads


def make_pipeline(session_factory, settings, client, pdf_task, sleep=None):
    return JobPipeline(
        session_factory,
        extractor_factory=lambda invoice_type: TextExtractor(
            client, settings=settings, pdf_task=pdf_task
        ),
        settings=settings,
        sleep=sleep or AsyncMock(),
    )


@pytest.fixture
def pdf_task():
    task = MagicMock()
    task.extract = MagicMock(return_value=PdfText(text="Sub Total $1,000.00", page_count=1))
    return task


class TestProgressHelpers:
    def test_batch_progress_spans_ten_to_seventy(self) -> None:
        assert batch_progress(0, 4) == 10
        assert batch_progress(1, 4) == 25
        assert batch_progress(4, 4) == 70
        assert batch_progress(1, 3) == 30

    def test_failure_message_uses_exception_message(self) -> None:
        assert failure_message(NoTextFoundError(document_name="a.pdf")).startswith("Processing failed: No text found")
        assert failure_message(RuntimeError("disk full")) == "Processing failed: unexpected internal error"

    def test_failure_message_hides_database_error_text(self) -> None:
        exc = OperationalError("INSERT INTO results VALUES (?)", ("3f6c", 1), Exception("no such table: results"))

        message = failure_message(exc)

        assert message == "Processing failed: database error"
        assert "INSERT" not in message

    def test_summary_mentions_failures_and_scans(self) -> None:
        results = [
            ExtractionResult(filename="a.pdf"),
            ExtractionResult.placeholder("b.pdf", NoTextFoundError(document_name="b.pdf")),
        ]

        message = summary_message(results, 0)

        assert message.startswith("No financial terms found in 2 documents")
        assert "(1 of 2 could not be processed)" in message
        assert "handwritten" in message

    def test_summary_counts_terms(self) -> None:
        message = summary_message([ExtractionResult(filename="a.pdf")], 1)
        assert message == "Successfully extracted 1 financial term from 1 document"


class TestJobPipelineRun:
    """Test suite for JobPipeline.run()."""

    @pytest.mark.asyncio
    async def test_subtotal_invoice_is_extracted_canonicalized_and_persisted(
        self, session_factory, pipeline_settings, scripted_client, pdf_task
    ) -> None:
        # Arrange
        job_id, payloads = await seed_job(
            session_factory, ["invoice.pdf"], synonyms=[("Sub Total", "Subtotal")]
        )
        pipeline = make_pipeline(session_factory, pipeline_settings, scripted_client(SUBTOTAL_RESPONSE), pdf_task)

        # Act
        job = await pipeline.run(job_id, payloads, InvoiceType.REGULAR)

        # Assert
        assert job.status == JobStatus.DONE
        assert job.progress == 100
        assert job.total_records == 1
        assert job.documents_processed == 1
        assert job.message == "Successfully extracted 1 financial term from 1 document"

        async with session_factory() as session:
            results = await result_crud.get_by_job_id(session, job_id)
            documents = await document_crud.get_by_job_id(session, job_id)
        assert len(results) == 1
        assert results[0].original_term == "Sub Total"
        assert results[0].canonical == "Subtotal"
        assert results[0].value == "1000.00"
        assert results[0].confidence == 95
        assert results[0].page == 1
        assert results[0].doc_name == "invoice.pdf"
        assert results[0].doc_id == payloads[0].document_id
        assert documents[0].status == DocumentStatus.PROCESSED

    @pytest.mark.asyncio
    async def test_zero_records_still_finishes_done(
        self, session_factory, pipeline_settings, scripted_client, pdf_task
    ) -> None:
        job_id, payloads = await seed_job(session_factory, ["blank.pdf"])
        pipeline = make_pipeline(session_factory, pipeline_settings, scripted_client("[]"), pdf_task)

        job = await pipeline.run(job_id, payloads)

        assert job.status == JobStatus.DONE
        assert job.progress == 100
        assert job.total_records == 0
        assert job.message.startswith("No financial terms found")

    @pytest.mark.asyncio
    async def test_failed_document_does_not_fail_the_job(
        self, session_factory, pipeline_settings, scripted_client, pdf_task
    ) -> None:
        # Arrange
        job_id, payloads = await seed_job(session_factory, ["a.pdf", "scan.pdf", "c.pdf"])
        pdf_task.extract.side_effect = [
            PdfText(text="Sub Total $1,000.00", page_count=1),
            NoTextFoundError(document_name="scan.pdf"),
            PdfText(text="Sub Total $1,000.00", page_count=1),
        ]
        pipeline = make_pipeline(
            session_factory, pipeline_settings, scripted_client(SUBTOTAL_RESPONSE), pdf_task
        )

        # Act
        job = await pipeline.run(job_id, payloads)

        # Assert
        assert job.status == JobStatus.DONE
        assert job.total_records == 2
        assert job.documents_processed == 3
        assert "(1 of 3 could not be processed)" in job.message

        async with session_factory() as session:
            documents = {doc.name: doc for doc in await document_crud.get_by_job_id(session, job_id)}
        assert documents["scan.pdf"].status == DocumentStatus.FAILED
        assert "No text found" in documents["scan.pdf"].error_message
        assert documents["a.pdf"].status == DocumentStatus.PROCESSED

    @pytest.mark.asyncio
    async def test_progress_reaches_finalizing_before_done(
        self, session_factory, pipeline_settings, scripted_client, pdf_task
    ) -> None:
        # Arrange
        job_id, payloads = await seed_job(session_factory, ["invoice.pdf"])
        seen = {}

        async def capture_state(delay):
            async with session_factory() as session:
                job = await job_crud.get_by_id(session, job_id)
            seen.update(status=job.status, progress=job.progress, message=job.message)

        pipeline = make_pipeline(
            session_factory, pipeline_settings, scripted_client("[]"), pdf_task, sleep=capture_state
        )

        # Act
        await pipeline.run(job_id, payloads)

        # Assert
        assert seen == {"status": JobStatus.RUNNING, "progress": 95, "message": "Finalizing..."}

    @pytest.mark.asyncio
    async def test_persistence_failure_marks_job_error(
        self, session_factory, pipeline_settings, scripted_client, pdf_task, monkeypatch
    ) -> None:
        # Arrange
        job_id, payloads = await seed_job(session_factory, ["invoice.pdf"])
        monkeypatch.setattr(result_crud, "create_many", AsyncMock(side_effect=RuntimeError("disk full")))
        pipeline = make_pipeline(
            session_factory, pipeline_settings, scripted_client(SUBTOTAL_RESPONSE), pdf_task
        )

        # Act
        job = await pipeline.run(job_id, payloads)

        # Assert
        assert job.status == JobStatus.ERROR
        assert job.message == "Processing failed: unexpected internal error"
        assert job.progress == 85
        async with session_factory() as session:
            assert await result_crud.count_by_job_id(session, job_id) == 0
            documents = await document_crud.get_by_job_id(session, job_id)
        assert documents[0].status == DocumentStatus.UPLOADED

    @pytest.mark.asyncio
    async def test_database_failure_message_hides_sql_and_ids(
        self, session_factory, pipeline_settings, scripted_client, pdf_task, monkeypatch
    ) -> None:
        # Arrange
        job_id, payloads = await seed_job(session_factory, ["invoice.pdf"])

        async def broken_insert(session, rows):
            await session.execute(text("INSERT INTO no_such_table VALUES (1)"))

        monkeypatch.setattr(result_crud, "create_many", broken_insert)
        pipeline = make_pipeline(
            session_factory, pipeline_settings, scripted_client(SUBTOTAL_RESPONSE), pdf_task
        )

        # Act
        job = await pipeline.run(job_id, payloads)

        # Assert
        assert job.status == JobStatus.ERROR
        assert job.message == "Processing failed: database error"
        assert "no_such_table" not in job.message
        assert str(payloads[0].document_id) not in job.message

    @pytest.mark.asyncio
    async def test_synonym_load_failure_marks_job_error(
        self, session_factory, pipeline_settings, scripted_client, pdf_task, monkeypatch
    ) -> None:
        job_id, payloads = await seed_job(session_factory, ["invoice.pdf"])
        monkeypatch.setattr(synonym_crud, "list_all", AsyncMock(side_effect=RuntimeError("relation missing")))
        client = scripted_client(SUBTOTAL_RESPONSE)
        pipeline = make_pipeline(session_factory, pipeline_settings, client, pdf_task)

        job = await pipeline.run(job_id, payloads)

        assert job.status == JobStatus.ERROR
        assert job.message == "Processing failed: unexpected internal error"
        assert client.calls == []

    @pytest.mark.asyncio
    async def test_terminal_job_is_not_run_again(
        self, session_factory, pipeline_settings, scripted_client, pdf_task
    ) -> None:
        # Arrange
        job_id, payloads = await seed_job(session_factory, ["invoice.pdf"])
        async with session_factory() as session:
            await job_crud.mark_done(session, job_id, documents_processed=1, total_records=0, message="done")
            await session.commit()
        client = scripted_client(SUBTOTAL_RESPONSE)
        pipeline = make_pipeline(session_factory, pipeline_settings, client, pdf_task)

        # Act
        job = await pipeline.run(job_id, payloads)

        # Assert
        assert job is None
        assert client.calls == []
        async with session_factory() as session:
            stored = await job_crud.get_by_id(session, job_id)
        assert stored.status == JobStatus.DONE
        assert stored.message == "done"

    @pytest.mark.asyncio
    async def test_heuristic_canonicalization_on_persisted_rows(
        self, session_factory, pipeline_settings, scripted_client, pdf_task
    ) -> None:
        # Arrange
        response = json.dumps([
            {"page": 1, "term": "Sub-Total", "value": "900"},
            {"page": 1, "term": "Freight", "value": "$25"},
        ])
        job_id, payloads = await seed_job(
            session_factory, ["invoice.pdf"], synonyms=[("subtotal", "Subtotal Amount")]
        )
        pipeline = make_pipeline(session_factory, pipeline_settings, scripted_client(response), pdf_task)

        # Act
        await pipeline.run(job_id, payloads)

        # Assert
        async with session_factory() as session:
            results = await result_crud.get_by_job_id(session, job_id)
        assert {(r.original_term, r.canonical, r.value) for r in results} == {
            ("Sub-Total", "Subtotal Amount", "900"),
            ("Freight", "Freight", "25"),
        }
