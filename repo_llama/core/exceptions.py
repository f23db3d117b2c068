"""
Exception hierarchy for RepoLlama.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class RepoLlamaException(Exception):
    """Base exception for all RepoLlama application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(RepoLlamaException):
    """Raised when caller input is malformed (missing query, bad chunk window, ...)."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class NotFoundError(RepoLlamaException):
    """Raised when a referenced context does not exist."""

    def __init__(self, context_name: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["context_name"] = context_name
        self.context_name = context_name
        super().__init__(f"Context not found: {context_name}", details)


class TransportError(RepoLlamaException):
    """Raised when an external service cannot be reached or times out."""

    def __init__(
        self,
        message: str,
        url: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if url:
            details["url"] = url
        super().__init__(message, details)


class RemoteError(RepoLlamaException):
    """Raised when an external service answers with a failure."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        status_text: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize remote error.

        Args:
            message: Error message
            status_code: HTTP status returned by the service
            status_text: Reason phrase or error body returned by the service
            details: Additional context
        """
        details = details or {}
        if status_code is not None:
            details["status_code"] = status_code
        self.status_code = status_code
        self.status_text = status_text or ""
        super().__init__(message, details)


class DimensionMismatchError(RepoLlamaException):
    """Raised when two embeddings that must share a dimension do not."""

    def __init__(
        self,
        expected: int,
        actual: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        details.update({"expected": expected, "actual": actual})
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Embedding dimension mismatch: expected {expected}, got {actual}", details
        )


class CorruptCollectionError(RepoLlamaException):
    """Raised when a stored context fails its structural invariants."""

    def __init__(
        self,
        message: str,
        context_name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if context_name:
            details["context_name"] = context_name
        super().__init__(message, details)
