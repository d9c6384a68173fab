"""
Response parser for extraction completions.

Models are asked for JSON but do not always comply: output may be a bare
array, an object wrapping the array under "results"/"data"/"items", a
markdown-fenced block, or prose around an array. Parsing is an ordered list
of pure strategies, each returning a list of raw items or None, followed by
per-item validation into ExtractedRecord.

Unparseable output is not an error. It yields an empty list and a warning.

Dependencies: json (stdlib), invoice_extractor.core.extraction.value_sanitizer
System role: Converts raw completion text into validated records
"""

import json
import logging
import math
import re
from typing import Any, Callable

from invoice_extractor.observability.log_utils import log_with_context

from .models import ExtractedRecord
from .value_sanitizer import sanitize_value

logger = logging.getLogger(__name__)

ParseStrategy = Callable[[str], list | None]

DEFAULT_CONFIDENCE = 90
EVIDENCE_MAX_LENGTH = 200

_FENCED_BLOCK = re.compile(r"```(?:json)?\s*([\s\S]*?)```", re.IGNORECASE)
_BRACKETED_ARRAY = re.compile(r"\[[\s\S]*\]")


def coerce_to_items(data: Any) -> list | None:
    """
    Reduce decoded JSON to a list of raw items.

    Objects are searched for a "results" array, then any other array value,
    then treated as a single record if they carry term and value.

    Args:
        data: Decoded JSON value

    Returns:
        list | None: Raw items, or None if no list can be found
    """
    if isinstance(data, list):
        return data
    if not isinstance(data, dict):
        return None

    if isinstance(data.get("results"), list):
        return data["results"]
    for value in data.values():
        if isinstance(value, list):
            return value
    if "term" in data and "value" in data:
        return [data]
    return None


def parse_direct(text: str) -> list | None:
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, TypeError, ValueError):
        return None
    return coerce_to_items(data)


def parse_fenced_block(text: str) -> list | None:
    match = _FENCED_BLOCK.search(text)
    if not match:
        return None
    return parse_direct(match.group(1).strip())


def parse_bracketed_array(text: str) -> list | None:
    match = _BRACKETED_ARRAY.search(text)
    if not match:
        return None
    return parse_direct(match.group(0))


STRATEGIES: tuple[ParseStrategy, ...] = (
    parse_direct,
    parse_fenced_block,
    parse_bracketed_array,
)


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _as_int(value: Any, default: int) -> int:
    if isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if math.isnan(number) or math.isinf(number):
        return default
    return int(number)


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def to_record(
    item: Any,
    page_bound: int,
    evidence_max_length: int = EVIDENCE_MAX_LENGTH,
    default_confidence: int = DEFAULT_CONFIDENCE,
) -> ExtractedRecord | None:
    """
    Validate one raw item.

    Args:
        item: Decoded JSON element
        page_bound: Highest valid page number
        evidence_max_length: Evidence truncation length
        default_confidence: Confidence used when missing or non-numeric

    Returns:
        ExtractedRecord | None: Record, or None when term or value is unusable
    """
    if not isinstance(item, dict):
        return None

    term = _as_text(item.get("term"))
    value = sanitize_value(_as_text(item.get("value")))
    if not term or not value:
        return None

    return ExtractedRecord(
        page=_clamp(_as_int(item.get("page"), 1), 1, max(page_bound, 1)),
        term=term,
        value=value,
        evidence=_as_text(item.get("evidence"))[:evidence_max_length],
        confidence=_clamp(_as_int(item.get("confidence"), default_confidence), 0, 100),
    )


def parse_extraction_response(
    text: str | None,
    page_bound: int,
    evidence_max_length: int = EVIDENCE_MAX_LENGTH,
    default_confidence: int = DEFAULT_CONFIDENCE,
) -> list[ExtractedRecord]:
    """
    Parse completion text into validated records.

    Args:
        text: Raw completion output
        page_bound: Highest valid page number (page count, or the vision ceiling)
        evidence_max_length: Evidence truncation length
        default_confidence: Confidence used when missing or non-numeric

    Returns:
        list[ExtractedRecord]: Records in model order, possibly empty
    """
    if not text or not text.strip():
        logger.warning("Empty extraction response")
        return []

    stripped = text.strip()
    items: list | None = None
    for strategy in STRATEGIES:
        items = strategy(stripped)
        if items is not None:
            break

    if items is None:
        log_with_context(
            logger,
            logging.WARNING,
            "Could not parse extraction response",
            response_preview=stripped[:200],
        )
        return []

    records = []
    for item in items:
        record = to_record(item, page_bound, evidence_max_length, default_confidence)
        if record is not None:
            records.append(record)

    if len(records) < len(items):
        logger.info(
            "Dropped invalid extraction items",
            extra={"kept": len(records), "dropped": len(items) - len(records)},
        )
    return records
