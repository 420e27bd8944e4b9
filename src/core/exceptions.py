"""Structured exception hierarchy for the user registry.

Every failure the registry reports is one of the ``ErrorCode`` kinds below,
raised as the exception class for its category:

- **ValidationError**: malformed input (email, password, tax ID)
- **ConflictError**: a uniqueness constraint would be violated
- **NotFoundError**: the referenced user does not exist

Each exception carries its ``ErrorCode`` so callers can match on
``exc.kind`` instead of parsing messages, a ``Severity`` for the response, and a
context dictionary that is sanitized before it reaches logs or responses.
"""

import traceback
from enum import Enum
from typing import Any


class ErrorCode(Enum):
    """Error kinds reported by the registry and the API."""

    # System errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    """An unexpected internal error occurred in the system."""

    # Request-level errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    """The request body or parameters could not be parsed."""

    NOT_FOUND = "NOT_FOUND"
    """The requested route or resource could not be found."""

    # Field validation errors
    INVALID_EMAIL = "INVALID_EMAIL"
    """The email does not have the ``local@domain.tld`` shape."""

    INVALID_PASSWORD = "INVALID_PASSWORD"
    """The password does not satisfy the complexity policy."""

    INVALID_SECONDARY_PASSWORD = "INVALID_SECONDARY_PASSWORD"
    """The secondary password does not satisfy the complexity policy."""

    INVALID_TAX_ID = "INVALID_TAX_ID"
    """The tax ID is malformed or its check digits do not match."""

    # Conflict errors
    EMAIL_IN_USE = "EMAIL_IN_USE"
    """Another record already owns the email."""

    TAX_ID_IN_USE = "TAX_ID_IN_USE"
    """Another record already owns the tax ID."""

    # Lookup errors
    USER_NOT_FOUND = "USER_NOT_FOUND"
    """No record exists with the given id."""


class Severity(Enum):
    """Severity levels reported in error responses."""

    LOW = "LOW"
    """Caller-input errors expected during normal operation."""

    MEDIUM = "MEDIUM"
    """Errors that affect a feature but not the whole service."""

    HIGH = "HIGH"
    """Errors impacting critical functionality or data integrity."""

    CRITICAL = "CRITICAL"
    """Unexpected failures requiring immediate attention."""


class RegistryError(Exception):
    """Base exception class for all application exceptions.

    Args:
        error_code: Error kind (string or ErrorCode enum)
        message: Human-readable error message
        severity: Severity level of the error (defaults to MEDIUM)
        context: Additional context information about the error
        cause: The original exception that caused this error
    """

    def __init__(
        self,
        error_code: str | ErrorCode,
        message: str,
        severity: Severity = Severity.MEDIUM,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.error_code = (
            error_code.value if isinstance(error_code, ErrorCode) else error_code
        )
        self.message = message
        self.severity = severity
        self.context = context or {}
        self.cause = cause

        # Capture stack trace at creation time, excluding this frame
        self.stack_trace = traceback.format_stack()[:-1]

        super().__init__(message)
        if cause:
            self.__cause__ = cause

    @property
    def kind(self) -> ErrorCode | None:
        """The ErrorCode member for this error, or None for custom codes."""
        try:
            return ErrorCode(self.error_code)
        except ValueError:
            return None

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        class_name = self.__class__.__name__
        context_str = f", context={self.context}" if self.context else ""
        return (
            f"{class_name}(error_code='{self.error_code}', "
            f"message='{self.message}', severity={self.severity.value}{context_str})"
        )


class ValidationError(RegistryError):
    """Raised when a field value is malformed.

    Args:
        message: Description of the validation failure
        error_code: Error code (defaults to VALIDATION_ERROR)
        context: Additional context information about the error
        cause: The original exception that caused this error
    """

    def __init__(
        self,
        message: str,
        error_code: str | ErrorCode = ErrorCode.VALIDATION_ERROR,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(error_code, message, Severity.LOW, context, cause)


class ConflictError(RegistryError):
    """Raised when a write would break a uniqueness constraint.

    Args:
        message: Description of the conflict
        error_code: Error code (e.g. EMAIL_IN_USE)
        context: Additional context information about the error
        cause: The original exception that caused this error
    """

    def __init__(
        self,
        message: str,
        error_code: str | ErrorCode,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(error_code, message, Severity.LOW, context, cause)


class NotFoundError(RegistryError):
    """Raised when a referenced record does not exist.

    Args:
        message: Description of what was not found
        error_code: Error code (defaults to NOT_FOUND)
        context: Additional context information about the error
        cause: The original exception that caused this error
    """

    def __init__(
        self,
        message: str,
        error_code: str | ErrorCode = ErrorCode.NOT_FOUND,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(error_code, message, Severity.LOW, context, cause)
