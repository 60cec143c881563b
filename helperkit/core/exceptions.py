"""Structured exception hierarchy for consistent error handling.

This module defines the exception system for helperkit, providing a rich
error model that supports debugging, monitoring, and call-site handling.

Key components:
- **ErrorCode enum**: Standardized error identifiers for programmatic handling
- **Severity enum**: Error classification for monitoring and alerting
- **TransportErrorKind enum**: Classification of outbound HTTP failures
- **HelperKitError**: Base exception with rich context and fingerprinting
- **Specialized exceptions**: Validation, configuration, storage, transport

Propagation policy:
- Transforms and predicates never raise; they normalize to safe defaults
- Storage failures are raised by backends and absorbed by the store facade
- Transport failures are logged by the request pipeline and re-raised
- Configuration failures halt startup and are never caught by the library
"""

import hashlib
import traceback
from enum import Enum
from typing import Any

from helperkit.core.types import ErrorContext


class ErrorCode(Enum):
    """Standardized error codes for helperkit.

    These error codes provide consistent identification of error types
    across the toolkit, enabling proper error handling and monitoring.
    """

    # System errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    """An unexpected internal error occurred."""

    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    """Required configuration is missing or invalid at startup."""

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    """Input validation failed due to invalid or malformed data."""

    # Storage errors
    STORAGE_ERROR = "STORAGE_ERROR"
    """The underlying key-value backend failed."""

    # Transport errors
    NO_RESPONSE = "NO_RESPONSE"
    """The request was sent but no response was received."""

    TIMEOUT = "TIMEOUT"
    """The request did not complete within its timeout."""

    ERROR_RESPONSE = "ERROR_RESPONSE"
    """The server answered with a non-2xx status."""

    REQUEST_SETUP_ERROR = "REQUEST_SETUP_ERROR"
    """The request could not be built before sending."""

    UNAUTHORIZED = "UNAUTHORIZED"
    """The server rejected the request credentials."""


class Severity(Enum):
    """Severity levels for helperkit errors."""

    LOW = "LOW"
    """Low severity errors that don't significantly impact functionality."""

    MEDIUM = "MEDIUM"
    """Medium severity errors that may affect some features but not critical ops."""

    HIGH = "HIGH"
    """High severity errors impacting critical functionality or security."""

    CRITICAL = "CRITICAL"
    """Critical errors requiring immediate attention, e.g. failed startup."""


class TransportErrorKind(Enum):
    """How an outbound request failed."""

    NO_RESPONSE = "no_response"
    ERROR_RESPONSE = "error_response"
    SETUP = "setup"


class HelperKitError(Exception):
    """Base exception class for all helperkit exceptions.

    Args:
        error_code: Unique identifier for the error type (string or ErrorCode enum)
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
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.error_code = (
            error_code.value if isinstance(error_code, ErrorCode) else error_code
        )
        self.message = message
        self.severity = severity
        self.context = context or {}
        self.cause = cause

        # Capture stack trace at creation time
        self.stack_trace = traceback.format_stack()[:-1]  # Exclude this frame

        self.fingerprint = self._generate_fingerprint()

        super().__init__(message)
        if cause:
            self.__cause__ = cause

    def _generate_fingerprint(self) -> str:
        """Generate a fingerprint for error grouping.

        Creates a hash based on the error type and the location where it was
        raised, allowing similar errors to be grouped together in log search.

        Returns:
            str: A hash string for error grouping
        """
        max_frames = 5
        relevant_frames = (
            self.stack_trace[-max_frames:]
            if len(self.stack_trace) > max_frames
            else self.stack_trace
        )

        fingerprint_data = f"{self.__class__.__name__}:{self.error_code}"

        for frame in relevant_frames:
            if "site-packages" not in frame and "helperkit/" in frame:
                lines = frame.strip().split("\n")
                if lines:
                    fingerprint_data += f":{lines[0]}"

        return hashlib.sha256(fingerprint_data.encode()).hexdigest()[:16]

    def __str__(self) -> str:
        """Return a string representation of the exception.

        Returns:
            str: A formatted string containing the error code and message
        """
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        """Return a detailed representation of the exception.

        Returns:
            str: A string showing the class name, error code, message, severity,
                and context
        """
        class_name = self.__class__.__name__
        context_str = f", context={self.context}" if self.context else ""
        return (
            f"{class_name}(error_code='{self.error_code}', "
            f"message='{self.message}', severity={self.severity.value}{context_str})"
        )


class ValidationError(HelperKitError):
    """Exception raised when an input contract is violated.

    Used for caller mistakes that must fail immediately, such as asking the
    key-value store for a namespace that does not exist.
    """

    def __init__(
        self,
        message: str,
        error_code: str | ErrorCode = ErrorCode.VALIDATION_ERROR,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(error_code, message, Severity.LOW, context, cause)


class ConfigurationError(HelperKitError):
    """Exception raised when required configuration is absent at startup.

    This error is fatal: nothing in helperkit catches it, so an unconfigured
    process stops instead of issuing requests against an empty base URL.
    """

    def __init__(
        self,
        message: str,
        error_code: str | ErrorCode = ErrorCode.CONFIGURATION_ERROR,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(error_code, message, Severity.CRITICAL, context, cause)


class StorageError(HelperKitError):
    """Exception raised by a storage backend when reading or writing fails."""

    def __init__(
        self,
        message: str,
        error_code: str | ErrorCode = ErrorCode.STORAGE_ERROR,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(error_code, message, Severity.MEDIUM, context, cause)


class TransportError(HelperKitError):
    """Base exception for failed outbound HTTP requests.

    Args:
        message: Description of the failure
        kind: Which stage of the exchange failed
        error_code: Error code for the failure
        severity: Severity level of the failure
        status: HTTP status code, when a response was received
        body: Decoded response body, when a response was received
        context: Additional context information about the error
        cause: The original exception that caused this error
    """

    def __init__(
        self,
        message: str,
        kind: TransportErrorKind,
        error_code: str | ErrorCode,
        severity: Severity = Severity.MEDIUM,
        status: int | None = None,
        body: Any = None,  # noqa: ANN401 - decoded JSON or raw text
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.kind = kind
        self.status = status
        self.body = body
        super().__init__(error_code, message, severity, context, cause)


class NoResponseError(TransportError):
    """The request was dispatched but no response arrived (network failure)."""

    def __init__(
        self,
        message: str,
        error_code: str | ErrorCode = ErrorCode.NO_RESPONSE,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            message,
            TransportErrorKind.NO_RESPONSE,
            error_code,
            Severity.MEDIUM,
            context=context,
            cause=cause,
        )


class RequestTimeoutError(NoResponseError):
    """The request exceeded its timeout before a response arrived."""

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, ErrorCode.TIMEOUT, context, cause)


class ErrorResponseError(TransportError):
    """The server returned a non-2xx status.

    Credential rejections (401/403) are HIGH severity; everything else is
    MEDIUM.
    """

    def __init__(
        self,
        message: str,
        status: int,
        body: Any = None,  # noqa: ANN401 - decoded JSON or raw text
        headers: dict[str, str] | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.headers = headers or {}
        rejected = status in (401, 403)
        super().__init__(
            message,
            TransportErrorKind.ERROR_RESPONSE,
            ErrorCode.UNAUTHORIZED if rejected else ErrorCode.ERROR_RESPONSE,
            Severity.HIGH if rejected else Severity.MEDIUM,
            status=status,
            body=body,
            context=context,
            cause=cause,
        )


class RequestSetupError(TransportError):
    """The request could not be built (bad URL, unserializable body, ...)."""

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            message,
            TransportErrorKind.SETUP,
            ErrorCode.REQUEST_SETUP_ERROR,
            Severity.MEDIUM,
            context=context,
            cause=cause,
        )
