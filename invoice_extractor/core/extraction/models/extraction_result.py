"""
Extraction result models.

In-flight records produced by the extractor for one document. They are
handed back to the pipeline and never persisted directly.

Dependencies: pydantic
System role: Return types for extractors and the batch runner
"""

from pydantic import BaseModel, Field

from invoice_extractor.core.exceptions import user_message


class ExtractedRecord(BaseModel):
    """One line item read from an invoice page."""

    page: int = Field(default=1, ge=1, description="1-based page number, clamped")
    term: str = Field(min_length=1, description="Label as printed on the invoice")
    value: str = Field(min_length=1, description="Sanitized numeric string")
    evidence: str = Field(default="", description="Supporting excerpt")
    confidence: int = Field(default=90, ge=0, le=100)


class ExtractionResult(BaseModel):
    """Extraction output for one document."""

    filename: str
    total_pages: int = Field(default=0, ge=0)
    results: list[ExtractedRecord] = Field(default_factory=list)
    raw_text: str = ""
    error: str | None = Field(
        default=None,
        description="Failure description when the document could not be extracted",
    )
    error_type: str | None = Field(default=None, description="Exception class name")

    @property
    def failed(self) -> bool:
        return self.error is not None

    @classmethod
    def placeholder(cls, filename: str, exc: BaseException) -> "ExtractionResult":
        """Empty result standing in for a document whose extraction raised."""
        return cls(
            filename=filename,
            total_pages=0,
            results=[],
            error=user_message(exc),
            error_type=type(exc).__name__,
        )
