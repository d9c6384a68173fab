"""
Value sanitizer for extracted amounts.

Normalizes the free-form amounts a model reads off an invoice ("$1,000.00",
"-Rs. 250", "18%") into plain numeric strings matching -?\\d+(\\.\\d+)?.
Digits are kept exactly as found: no rounding and no zero padding.

Dependencies: re (stdlib)
System role: Value normalization for the response parser
"""

import re

NUMERIC_PATTERN = re.compile(r"-?\d+(\.\d+)?")

_CURRENCY_MARKERS = re.compile(r"Rs\.?|\$|%", re.IGNORECASE)
_SEPARATORS = re.compile(r"[,\s]")
_NON_NUMERIC = re.compile(r"[^\d.\-]")
_NON_DIGIT_OR_DOT = re.compile(r"[^\d.]")


def is_numeric(value: str) -> bool:
    """Whether value already has the storage form."""
    return NUMERIC_PATTERN.fullmatch(value) is not None


def sanitize_value(raw: object) -> str:
    """
    Reduce a raw extracted value to a numeric string.

    Args:
        raw: Value as emitted by the model (usually str, sometimes a number)

    Returns:
        str: Numeric string, or "" when nothing numeric survives (the caller
        drops the record)

    Example:
        >>> sanitize_value("-$500.00")
        '-500.00'
        >>> sanitize_value("10%")
        '10'
    """
    if raw is None:
        return ""

    text = str(raw).strip()
    is_negative = text.startswith("-")

    cleaned = _CURRENCY_MARKERS.sub("", text)
    cleaned = _SEPARATORS.sub("", cleaned)

    # Discounts are negative; stripping a leading marker must not lose the sign
    if is_negative and not cleaned.startswith("-"):
        cleaned = "-" + cleaned

    cleaned = _NON_NUMERIC.sub("", cleaned)
    if is_numeric(cleaned):
        return cleaned

    digits = _NON_DIGIT_OR_DOT.sub("", cleaned)
    fallback = f"-{digits}" if is_negative else digits
    return fallback if is_numeric(fallback) else ""
