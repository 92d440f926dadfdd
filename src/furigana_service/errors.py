"""Annotation error taxonomy and response helpers.

Every error carries a stable `kind`, the HTTP status it maps to, and a message
that is safe to return to the caller.
"""

from __future__ import annotations

from typing import Any


class AnnotationError(Exception):
    """Base class for failures surfaced by the annotation handler."""

    kind = "AnnotationError"
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class EmptyInputError(AnnotationError):
    kind = "EmptyInput"
    status_code = 400

    def __init__(self, message: str = "Missing or empty text") -> None:
        super().__init__(message)


class TooLongError(AnnotationError):
    kind = "TooLong"
    status_code = 400

    def __init__(self, max_length: int) -> None:
        super().__init__(f"Text exceeds maximum length of {max_length} characters")
        self.max_length = max_length


class ServiceUnavailableError(AnnotationError):
    """The model credential is missing; not the caller's fault and not retryable."""

    kind = "ServiceUnavailable"

    def __init__(self, message: str = "Annotation service not configured") -> None:
        super().__init__(message)


class UpstreamError(AnnotationError):
    """Transport or service failure raised by the model call."""

    kind = "UpstreamError"


class UpstreamInvalidResponseError(AnnotationError):
    """The model answered, but not with a `{"html": str}` JSON object."""

    kind = "UpstreamInvalidResponse"


def to_error_response(err: AnnotationError) -> dict[str, Any]:
    """Build the uniform error body returned by the HTTP layer."""
    return {"error": err.message}
