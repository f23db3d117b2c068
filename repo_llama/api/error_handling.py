"""
API error handling utilities.

Provides a decorator mapping the domain exception hierarchy to HTTP errors
consistently across endpoints.
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import HTTPException, status

from repo_llama.core.exceptions import (
    CorruptCollectionError,
    DimensionMismatchError,
    NotFoundError,
    RemoteError,
    RepoLlamaException,
    TransportError,
    ValidationError,
)
from repo_llama.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

# Type for the decorated function
F = TypeVar("F", bound=Callable[..., Any])

STATUS_BY_ERROR: list[tuple[type[RepoLlamaException], int, str]] = [
    (ValidationError, 400, "VALIDATION_ERROR"),
    (NotFoundError, 404, "NOT_FOUND"),
    (DimensionMismatchError, 422, "DIMENSION_MISMATCH"),
    (CorruptCollectionError, 422, "CORRUPT_CONTEXT"),
    (RemoteError, 502, "REMOTE_ERROR"),
    (TransportError, 502, "TRANSPORT_ERROR"),
]


def classify_error(exc: Exception) -> tuple[int, str]:
    """Return (HTTP status, error code) for an exception."""
    for error_type, status_code, code in STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code, code
    return status.HTTP_500_INTERNAL_SERVER_ERROR, "PROCESSING_ERROR"


def handle_api_errors(func: F) -> F:
    """
    Decorator to turn domain errors into HTTPExceptions.

    Client-side errors are logged as warnings, service failures as errors and
    anything unexpected with a traceback.
    """
    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)

        except HTTPException:
            raise

        except RepoLlamaException as e:
            status_code, code = classify_error(e)
            log = logger.warning if status_code < 500 else logger.error
            log(
                f"Request failed: {code}",
                extra={"error_type": type(e).__name__, "error": str(e), "details": e.details},
            )
            raise HTTPException(status_code=status_code, detail=e.message)

        except Exception as e:
            log_exception_with_context(logger, "Unexpected failure handling request", e)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"An internal error occurred: {str(e)}",
            )

    return wrapper  # type: ignore
