"""
Tests for request log levels.

System role: Verification of polling noise reduction
"""

import logging

import pytest

from invoice_extractor.observability.middleware import request_log_level


@pytest.mark.parametrize("method,path,status_code,expected", [
    ("GET", "/api/v1/jobs/123", 200, logging.DEBUG),
    ("GET", "/api/v1/health", 200, logging.DEBUG),
    ("GET", "/api/v1/jobs/123", 404, logging.INFO),
    ("POST", "/api/v1/ingest", 200, logging.INFO),
    ("GET", "/api/v1/results/123", 200, logging.INFO),
    ("GET", "/api/v1/health/db", 503, logging.WARNING),
    ("POST", "/api/v1/chat", 502, logging.WARNING),
])
def test_request_log_level(method, path, status_code, expected) -> None:
    assert request_log_level(method, path, status_code) == expected
