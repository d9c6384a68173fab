"""
Batch runner for extraction jobs.

Runs an ordered list of documents through an extractor, one result per input
in input order. A document whose extraction raises is logged and replaced by
an empty placeholder so one bad file never aborts the batch. After each
document the progress callback receives (current, total, filename).

Sequential by default. With concurrency > 1, documents are extracted under a
semaphore while results and progress keep input order.

Dependencies: asyncio (stdlib), invoice_extractor.core.extraction.extractor_adapter
System role: Batch stage of the extraction pipeline
"""

import asyncio
import logging
from typing import Awaitable, Callable, Sequence

from invoice_extractor.observability.log_utils import log_exception_with_context

from .extractor_adapter import BaseExtractor
from .models import DocumentPayload, ExtractionResult

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int, str], Awaitable[None]]


class BatchRunner:
    """Extract a batch of documents with per-document failure isolation."""

    def __init__(self, extractor: BaseExtractor, concurrency: int = 1) -> None:
        """
        Initialize batch runner.

        Args:
            extractor: Extractor applied to every document
            concurrency: Documents extracted at once (1 = sequential)
        """
        self._extractor = extractor
        self._concurrency = max(concurrency, 1)

    async def _extract_one(self, document: DocumentPayload) -> ExtractionResult:
        try:
            result = await self._extractor.extract(document)
        except Exception as e:
            log_exception_with_context(
                logger,
                f"{__name__}:process_batch - Extraction failed, continuing",
                e,
                document_name=document.filename,
            )
            return ExtractionResult.placeholder(document.filename, e)

        logger.info(
            f"{__name__}:process_batch - Document extracted",
            extra={"document_name": document.filename, "record_count": len(result.results)},
        )
        return result

    @staticmethod
    async def _report(
        on_progress: ProgressCallback | None,
        current: int,
        total: int,
        filename: str,
    ) -> None:
        if on_progress is None:
            return
        try:
            await on_progress(current, total, filename)
        except Exception as e:
            # Progress is advisory; a failed update must not fail the batch
            log_exception_with_context(
                logger,
                f"{__name__}:process_batch - Progress callback failed",
                e,
                current=current,
                total=total,
            )

    async def process_batch(
        self,
        documents: Sequence[DocumentPayload],
        on_progress: ProgressCallback | None = None,
    ) -> list[ExtractionResult]:
        """
        Extract every document.

        Args:
            documents: Documents in submission order
            on_progress: Awaited once per document with (current, total, filename)

        Returns:
            list[ExtractionResult]: One result per document, same order
        """
        total = len(documents)
        if self._concurrency == 1 or total <= 1:
            results = []
            for index, document in enumerate(documents):
                results.append(await self._extract_one(document))
                await self._report(on_progress, index + 1, total, document.filename)
            return results

        semaphore = asyncio.Semaphore(self._concurrency)

        async def bounded(document: DocumentPayload) -> ExtractionResult:
            async with semaphore:
                return await self._extract_one(document)

        tasks = [asyncio.create_task(bounded(document)) for document in documents]
        results = []
        for index, (document, task) in enumerate(zip(documents, tasks)):
            results.append(await task)
            await self._report(on_progress, index + 1, total, document.filename)
        return results
