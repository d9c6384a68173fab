"""
Logging utilities for structured log context.

Model output, raw uploads and user-supplied filenames end up in log context;
these helpers keep that context bounded and printable.

Dependencies: logging (stdlib), pydantic
System role: Logging helper functions
"""

import enum
import logging
import uuid
from typing import Any

from pydantic import BaseModel

DEFAULT_MAX_LENGTH = 500


def safe_log_value(value: Any, max_length: int = DEFAULT_MAX_LENGTH) -> str:
    """
    Render a value for log context.

    Bytes, collections and pydantic models are summarized rather than dumped,
    so an uploaded PDF or a full extraction result never lands in a log line.

    Args:
        value: Value to convert
        max_length: Maximum length before truncating

    Returns:
        str: Printable representation
    """
    try:
        if value is None:
            return "None"
        if isinstance(value, enum.Enum):
            text = str(value.value)
        elif isinstance(value, str):
            text = value
        elif isinstance(value, uuid.UUID):
            text = str(value)
        elif isinstance(value, (bytes, bytearray)):
            text = f"bytes({len(value)})"
        elif isinstance(value, BaseModel):
            text = f"{type(value).__name__}({', '.join(sorted(type(value).model_fields))})"
        elif isinstance(value, (list, tuple, set)):
            text = f"{type(value).__name__}({len(value)} items)"
        elif isinstance(value, dict):
            text = f"dict({len(value)} keys)"
        else:
            text = str(value)
    except Exception as e:
        return f"<unable to log: {type(e).__name__}>"

    if len(text) > max_length:
        return text[:max_length] + f"... (truncated, {len(text)} total)"
    return text


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context,
) -> None:
    """Log a message with every context value passed through safe_log_value."""
    logger.log(
        level,
        message,
        extra={key: safe_log_value(val) for key, val in context.items()},
    )


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: BaseException,
    **context,
) -> None:
    """
    Log an exception at ERROR with its traceback and a bounded message.

    Args:
        logger: Logger instance
        message: Log message
        exc: Exception instance
        **context: Additional context
    """
    extra = {key: safe_log_value(val) for key, val in context.items()}
    extra["error_type"] = type(exc).__name__
    extra["error_msg"] = safe_log_value(getattr(exc, "message", None) or str(exc))
    logger.error(message, exc_info=exc, extra=extra)
