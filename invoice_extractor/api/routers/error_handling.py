"""
Router error handling utilities.

Decorator translating domain exceptions into HTTPExceptions so every
endpoint maps failures to the same status codes.
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import HTTPException, status

from invoice_extractor.core.exceptions import (
    DuplicateSynonymError,
    ExtractionServiceError,
    JobNotFoundError,
    StorageError,
    SynonymNotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def handle_domain_errors(func: F) -> F:
    """
    Decorator mapping domain errors to HTTP responses.

    - ValidationError -> 400
    - JobNotFoundError, SynonymNotFoundError -> 404
    - DuplicateSynonymError -> 409
    - ExtractionServiceError -> 502
    - StorageError -> 503

    Only the human-readable message reaches the client.
    """

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)

        except ValidationError as e:
            logger.warning("Invalid request", extra={"error": e.message, **e.details})
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)

        except (JobNotFoundError, SynonymNotFoundError) as e:
            logger.warning("Resource not found", extra={"error": e.message, **e.details})
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)

        except DuplicateSynonymError as e:
            logger.warning("Synonym conflict", extra={"error": e.message, **e.details})
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)

        except ExtractionServiceError as e:
            logger.error("Completion service failed", extra={"error": e.message, **e.details})
            raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message)

        except StorageError as e:
            logger.error("Storage unavailable", extra={"error": e.message, **e.details})
            raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=e.message)

    return wrapper  # type: ignore[return-value]
