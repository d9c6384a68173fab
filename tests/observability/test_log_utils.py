"""
Tests for logging helpers.

System role: Verification of bounded log context
"""

import logging
import uuid

import pytest

from invoice_extractor.boundary.db.models.job_model import JobStatus
from invoice_extractor.core.exceptions import StorageError
from invoice_extractor.core.extraction.models import DocumentPayload
from invoice_extractor.observability.log_utils import (
    log_exception_with_context,
    log_with_context,
    safe_log_value,
)


class TestSafeLogValue:
    @pytest.mark.parametrize("value,expected", [
        (None, "None"),
        ("text", "text"),
        (b"%PDF-1.4", "bytes(8)"),
        ([1, 2, 3], "list(3 items)"),
        ({"a": 1}, "dict(1 keys)"),
        (42, "42"),
        (JobStatus.DONE, "done"),
        (uuid.UUID(int=1), "00000000-0000-0000-0000-000000000001"),
    ])
    def test_conversions(self, value, expected) -> None:
        assert safe_log_value(value) == expected

    def test_truncates_long_model_output(self) -> None:
        result = safe_log_value("x" * 600, max_length=100)

        assert result.startswith("x" * 100)
        assert result.endswith("(truncated, 600 total)")

    def test_payload_is_summarized(self) -> None:
        payload = DocumentPayload(filename="a.pdf", content=b"%PDF" * 1000)

        assert safe_log_value(payload) == "DocumentPayload(content, content_type, document_id, filename)"

    def test_unprintable_value(self) -> None:
        class Broken:
            def __str__(self):
                raise RuntimeError("no")

        assert safe_log_value(Broken()) == "<unable to log: RuntimeError>"


def test_log_with_context_attaches_safe_extra(caplog) -> None:
    logger = logging.getLogger("tests.log_utils")

    with caplog.at_level(logging.INFO, logger="tests.log_utils"):
        log_with_context(logger, logging.INFO, "Parsed response", raw=b"abc", job_id="j-1")

    record = caplog.records[-1]
    assert record.raw == "bytes(3)"
    assert record.job_id == "j-1"


def test_log_exception_with_context(caplog) -> None:
    logger = logging.getLogger("tests.log_utils")

    with caplog.at_level(logging.ERROR, logger="tests.log_utils"):
        log_exception_with_context(logger, "Run failed", ValueError("bad value"), document_name="a.pdf")

    record = caplog.records[-1]
    assert record.error_type == "ValueError"
    assert record.error_msg == "bad value"
    assert record.document_name == "a.pdf"
    assert record.exc_info is not None


def test_domain_exception_logs_message_without_details(caplog) -> None:
    logger = logging.getLogger("tests.log_utils")

    with caplog.at_level(logging.ERROR, logger="tests.log_utils"):
        log_exception_with_context(logger, "Upload failed", StorageError("Bucket unavailable", operation="upload"))

    assert caplog.records[-1].error_msg == "Bucket unavailable"
