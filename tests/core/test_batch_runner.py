"""
Tests for the batch runner.

System role: Verification of per-document failure isolation and progress
"""

import asyncio
from unittest.mock import AsyncMock

import pytest

from invoice_extractor.core.exceptions import NoTextFoundError
from invoice_extractor.core.extraction.batch_runner import BatchRunner
from invoice_extractor.core.extraction.models import (
    DocumentPayload,
    ExtractedRecord,
    ExtractionResult,
)


def make_documents(count: int) -> list[DocumentPayload]:
    return [DocumentPayload(filename=f"doc-{index}.pdf", content=b"%PDF") for index in range(1, count + 1)]


def ok_result(document: DocumentPayload) -> ExtractionResult:
    return ExtractionResult(
        filename=document.filename,
        total_pages=1,
        results=[ExtractedRecord(page=1, term="Total", value="10")],
    )


class FakeExtractor:
    """Extractor that fails for selected filenames."""

    def __init__(self, failing: set[str] | None = None, delays: dict[str, float] | None = None):
        self.failing = failing or set()
        self.delays = delays or {}
        self.seen: list[str] = []

    async def extract(self, document: DocumentPayload) -> ExtractionResult:
        self.seen.append(document.filename)
        await asyncio.sleep(self.delays.get(document.filename, 0))
        if document.filename in self.failing:
            raise NoTextFoundError(document_name=document.filename)
        return ok_result(document)


class TestProcessBatch:
    """Test suite for BatchRunner.process_batch()."""

    @pytest.mark.asyncio
    async def test_failure_in_middle_keeps_order_and_reports_every_document(self) -> None:
        # Arrange
        documents = make_documents(3)
        runner = BatchRunner(FakeExtractor(failing={"doc-2.pdf"}))
        on_progress = AsyncMock()

        # Act
        results = await runner.process_batch(documents, on_progress)

        # Assert
        assert [result.filename for result in results] == ["doc-1.pdf", "doc-2.pdf", "doc-3.pdf"]
        assert results[0].results and results[2].results
        assert results[1].results == []
        assert results[1].total_pages == 0
        assert results[1].failed
        assert results[1].error_type == "NoTextFoundError"
        assert [call.args for call in on_progress.await_args_list] == [
            (1, 3, "doc-1.pdf"),
            (2, 3, "doc-2.pdf"),
            (3, 3, "doc-3.pdf"),
        ]

    @pytest.mark.asyncio
    async def test_sequential_by_default(self) -> None:
        extractor = FakeExtractor()
        documents = make_documents(4)

        await BatchRunner(extractor).process_batch(documents)

        assert extractor.seen == [document.filename for document in documents]

    @pytest.mark.asyncio
    async def test_empty_batch(self) -> None:
        on_progress = AsyncMock()

        results = await BatchRunner(FakeExtractor()).process_batch([], on_progress)

        assert results == []
        on_progress.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_progress_callback_failure_does_not_abort(self) -> None:
        on_progress = AsyncMock(side_effect=RuntimeError("database down"))

        results = await BatchRunner(FakeExtractor()).process_batch(make_documents(2), on_progress)

        assert len(results) == 2
        assert on_progress.await_count == 2

    @pytest.mark.asyncio
    async def test_concurrent_mode_preserves_input_order(self) -> None:
        # Arrange
        documents = make_documents(3)
        extractor = FakeExtractor(
            failing={"doc-3.pdf"},
            delays={"doc-1.pdf": 0.03, "doc-2.pdf": 0.0, "doc-3.pdf": 0.01},
        )
        on_progress = AsyncMock()

        # Act
        results = await BatchRunner(extractor, concurrency=3).process_batch(documents, on_progress)

        # Assert
        assert [result.filename for result in results] == ["doc-1.pdf", "doc-2.pdf", "doc-3.pdf"]
        assert results[2].failed
        assert [call.args[0] for call in on_progress.await_args_list] == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_unexpected_error_is_recorded_without_raw_text(self) -> None:
        # Arrange
        class BrokenExtractor:
            async def extract(self, document):
                raise OSError("[Errno 2] No such file: '/tmp/invoice_8f1c.pdf'")

        # Act
        results = await BatchRunner(BrokenExtractor()).process_batch(make_documents(1))

        # Assert
        assert results[0].failed
        assert results[0].error == "unexpected internal error"
        assert results[0].error_type == "OSError"

    @pytest.mark.asyncio
    async def test_domain_error_message_is_kept(self) -> None:
        results = await BatchRunner(FakeExtractor(failing={"doc-1.pdf"})).process_batch(make_documents(1))

        assert results[0].error.startswith("No text found in PDF")
