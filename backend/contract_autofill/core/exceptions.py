"""Custom exception classes for the contract autofill service."""

from typing import List, Optional


class AutofillError(Exception):
    """Base exception for application errors."""

    status_code = 500
    error = "Internal error"

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class NotFoundError(AutofillError):
    """Raised when a referenced document, property or draft does not exist."""

    status_code = 404
    error = "Not found"


class ConflictError(AutofillError):
    """Raised when an operation would violate the draft lifecycle."""

    status_code = 409
    error = "Conflict"


class ValidationError(AutofillError):
    """Raised on malformed input or when required fields are missing."""

    status_code = 400
    error = "Validation failed"

    def __init__(
        self,
        message: str,
        fields: Optional[List[str]] = None,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(message, original_error)
        self.fields = list(fields or [])


class ProviderError(AutofillError):
    """Raised when the analysis provider fails or returns unusable content."""

    status_code = 500
    error = "Contract analysis failed"
