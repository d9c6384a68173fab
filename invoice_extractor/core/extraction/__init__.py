"""
Invoice extraction pipeline.

Value sanitizing, response parsing and canonicalization are pure and exported
here. The extractors, batch runner, job pipeline and queue worker live in
their own modules since they pull in the model client and the database.

Dependencies: pydantic, pydantic_settings
System role: Extraction pipeline package
"""

from .canonicalizer import build_synonym_snapshot, canonicalize, normalize_term
from .configs import ExtractionPipelineSettings, get_pipeline_settings
from .models import DocumentPayload, ExtractedRecord, ExtractionResult, JobMessage
from .response_parser import parse_extraction_response
from .value_sanitizer import sanitize_value

__all__ = [
    "DocumentPayload",
    "ExtractedRecord",
    "ExtractionPipelineSettings",
    "ExtractionResult",
    "JobMessage",
    "build_synonym_snapshot",
    "canonicalize",
    "get_pipeline_settings",
    "normalize_term",
    "parse_extraction_response",
    "sanitize_value",
]
