"""
Extractor adapters for the two invoice paths.

TextExtractor handles machine-printed PDFs: read the text layer, send it to
the text model, parse the reply with pages bounded by the PDF page count.
VisionExtractor handles scans, photos and handwritten invoices: send the
whole file to the vision model, parse with pages bounded by a fixed ceiling.

Both return an ExtractionResult and never raise for model-level problems
(empty or malformed output yields zero records). They raise for transport
failures, unreadable content and PDFs without text.

Dependencies: invoice_extractor.core.extraction.tasks, response_parser
System role: Per-document extraction step of the pipeline
"""

import asyncio
import logging
import mimetypes
from abc import ABC, abstractmethod
from pathlib import Path

from invoice_extractor.boundary.db.models.job_model import InvoiceType
from invoice_extractor.configs.llm import LLMSettings
from invoice_extractor.core.exceptions import DocumentUnavailableError

from .configs import ExtractionPipelineSettings, get_pipeline_settings
from .extraction_prompts import (
    SYSTEM_INSTRUCTIONS,
    build_text_instructions,
    build_vision_instructions,
)
from .models import DocumentPayload, ExtractionResult
from .response_parser import parse_extraction_response
from .tasks import Attachment, CompletionClient, GeminiCompletionClient, PdfTextTask

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "image/jpeg"

MIME_TYPES_BY_EXTENSION = {
    ".pdf": "application/pdf",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".webp": "image/webp",
}


def resolve_mime_type(filename: str, declared: str | None = None) -> str:
    """
    MIME type for an upload: declared type if specific, else by extension.

    Args:
        filename: Original filename
        declared: Content type sent by the client

    Returns:
        str: MIME type, image/jpeg when unknown
    """
    if declared and declared != "application/octet-stream":
        return declared
    extension = Path(filename).suffix.lower()
    if extension in MIME_TYPES_BY_EXTENSION:
        return MIME_TYPES_BY_EXTENSION[extension]
    guessed, _ = mimetypes.guess_type(filename)
    return guessed or DEFAULT_MIME_TYPE


class BaseExtractor(ABC):
    """Shared behaviour of the extraction paths."""

    def __init__(
        self,
        client: CompletionClient,
        temperature: float,
        max_tokens: int,
        settings: ExtractionPipelineSettings | None = None,
    ) -> None:
        """
        Initialize extractor.

        Args:
            client: Completion service
            temperature: Sampling temperature (kept low for reproducible figures)
            max_tokens: Output token limit
            settings: Pipeline settings (uses defaults if None)
        """
        self._client = client
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._settings = settings or get_pipeline_settings()

    def _parse(self, text: str, page_bound: int) -> list:
        return parse_extraction_response(
            text,
            page_bound,
            evidence_max_length=self._settings.evidence_max_length,
            default_confidence=self._settings.default_confidence,
        )

    @staticmethod
    def _require_content(document: DocumentPayload) -> None:
        if not document.content:
            raise DocumentUnavailableError(
                "Document content is empty or unavailable", document_name=document.filename
            )

    @abstractmethod
    async def extract(self, document: DocumentPayload) -> ExtractionResult:
        """Extract records from one document."""


class TextExtractor(BaseExtractor):
    """Text-layer extraction for machine-printed PDFs."""

    def __init__(
        self,
        client: CompletionClient,
        temperature: float = 0.1,
        max_tokens: int = 2000,
        settings: ExtractionPipelineSettings | None = None,
        pdf_task: PdfTextTask | None = None,
    ) -> None:
        super().__init__(client, temperature, max_tokens, settings)
        self._pdf_task = pdf_task or PdfTextTask()

    async def extract(self, document: DocumentPayload) -> ExtractionResult:
        """
        Extract records from a PDF's text layer.

        Args:
            document: PDF payload

        Returns:
            ExtractionResult: Records with pages clamped to the page count

        Raises:
            DocumentUnavailableError: When the payload has no bytes
            NoTextFoundError: When the PDF has no text layer
            ParsingError: When the PDF cannot be read
            ExtractionServiceError: When the completion call fails
        """
        self._require_content(document)
        pdf_text = await asyncio.to_thread(
            self._pdf_task.extract, document.content, document.filename
        )
        logger.info(
            f"{__name__}:TextExtractor.extract - Text extracted",
            extra={
                "document_name": document.filename,
                "page_count": pdf_text.page_count,
                "text_length": len(pdf_text.text),
            },
        )

        response = await self._client.complete(
            SYSTEM_INSTRUCTIONS,
            build_text_instructions(pdf_text.text, pdf_text.page_count),
            temperature=self._temperature,
            max_tokens=self._max_tokens,
            json_mode=True,
        )
        records = self._parse(response, pdf_text.page_count)

        return ExtractionResult(
            filename=document.filename,
            total_pages=pdf_text.page_count,
            results=records,
            raw_text=pdf_text.text,
        )


class VisionExtractor(BaseExtractor):
    """Single-shot vision extraction for images and handwritten invoices."""

    def __init__(
        self,
        client: CompletionClient,
        temperature: float = 0.1,
        max_tokens: int = 4000,
        settings: ExtractionPipelineSettings | None = None,
    ) -> None:
        super().__init__(client, temperature, max_tokens, settings)

    async def extract(self, document: DocumentPayload) -> ExtractionResult:
        """
        Extract records from the whole file.

        Args:
            document: Image or PDF payload

        Returns:
            ExtractionResult: Records with pages clamped to the vision ceiling;
            total_pages is 1 since the page count is not known

        Raises:
            DocumentUnavailableError: When the payload has no bytes
            ExtractionServiceError: When the completion call fails
        """
        self._require_content(document)
        mime_type = resolve_mime_type(document.filename, document.content_type)

        response = await self._client.complete(
            SYSTEM_INSTRUCTIONS,
            build_vision_instructions(document.filename),
            temperature=self._temperature,
            max_tokens=self._max_tokens,
            json_mode=True,
            attachment=Attachment(data=document.content, mime_type=mime_type),
        )
        records = self._parse(response, self._settings.vision_page_ceiling)

        logger.info(
            f"{__name__}:VisionExtractor.extract - Vision extraction complete",
            extra={
                "document_name": document.filename,
                "mime_type": mime_type,
                "record_count": len(records),
            },
        )
        return ExtractionResult(
            filename=document.filename,
            total_pages=1,
            results=records,
            raw_text="",
        )


def get_extractor(
    invoice_type: InvoiceType | str,
    client: CompletionClient | None = None,
    llm_settings: LLMSettings | None = None,
    settings: ExtractionPipelineSettings | None = None,
) -> BaseExtractor:
    """
    Build the extractor for an invoice type.

    Args:
        invoice_type: REGULAR (text path) or HANDWRITTEN (vision path)
        client: Completion service (defaults to Gemini with LLM settings)
        llm_settings: Model settings (read from environment if None)
        settings: Pipeline settings

    Returns:
        BaseExtractor: TextExtractor or VisionExtractor

    Raises:
        ValueError: For an unknown invoice type
    """
    invoice_type = InvoiceType(invoice_type)
    llm = llm_settings or LLMSettings()

    if invoice_type is InvoiceType.HANDWRITTEN:
        return VisionExtractor(
            client or GeminiCompletionClient(
                llm.vision_model, llm.google_api_key, llm.request_timeout, llm.max_attempts
            ),
            temperature=llm.extraction_temperature,
            max_tokens=llm.vision_max_tokens,
            settings=settings,
        )

    return TextExtractor(
        client or GeminiCompletionClient(
            llm.text_model, llm.google_api_key, llm.request_timeout, llm.max_attempts
        ),
        temperature=llm.extraction_temperature,
        max_tokens=llm.text_max_tokens,
        settings=settings,
    )
