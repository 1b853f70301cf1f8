"""
Domain errors of the critique service.

Every error carries a details dict that ends up in log context. Only
ExtractionError is ever shown to a client; the others are recovered from
inside the pipeline.

Dependencies: None
System role: Error vocabulary shared by all layers
"""

from typing import Any


class CritiqueServiceException(Exception):
    """Root of the service's error hierarchy: a message plus structured details."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = dict(details) if details else {}

    def __str__(self) -> str:
        if not self.details:
            return self.message
        return f"{self.message} | Details: {self.details}"


class ExtractionError(CritiqueServiceException):
    """Raised when an uploaded document yields no usable text.

    The only failure that is surfaced to the client (as a rejected request).
    """

    def __init__(
        self,
        message: str,
        file_name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize extraction error.

        Args:
            message: Error message
            file_name: Name of the uploaded file, when known
            details: Additional context
        """
        details = details or {}
        if file_name:
            details["file_name"] = file_name
        super().__init__(message, details)


class GenerationError(CritiqueServiceException):
    """Generative call failed: timeout, malformed output, quota or transport.

    Never raised to callers of the generators; carried inside a
    GenerationOutcome instead.
    """

    TIMEOUT = "timeout"
    MALFORMED_OUTPUT = "malformed_output"
    EMPTY_RESPONSE = "empty_response"
    UPSTREAM_ERROR = "upstream_error"

    def __init__(
        self,
        message: str,
        reason: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize generation error.

        Args:
            message: Error message (must not contain the raw transport error)
            reason: One of the class-level reason constants
            details: Additional context
        """
        details = details or {}
        details["reason"] = reason
        self.reason = reason
        super().__init__(message, details)


class StorageError(CritiqueServiceException):
    """Raised when the session store cannot be read."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize storage error.

        Args:
            message: Error message
            operation: Operation that failed (get, put, scan)
            key: Key or prefix involved
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        if key:
            details["key"] = key
        super().__init__(message, details)


class SessionNotFoundError(CritiqueServiceException):
    """Raised when an identifier cannot be reconciled to a live session."""

    def __init__(self, session_id: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize session not found error.

        Args:
            session_id: Identifier that could not be resolved
            details: Additional context
        """
        details = details or {}
        details["session_id"] = session_id
        self.session_id = session_id
        super().__init__(f"Session not found: {session_id}", details)
