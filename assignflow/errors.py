"""Domain error taxonomy and transport failure signals."""

from __future__ import annotations

from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional

from .contracts import ValidationError
from .validation import field_errors, question_errors


class ErrorKind(str, Enum):
    """Closed set of failure kinds surfaced by the engine."""

    VALIDATION = "validation"
    BAD_REQUEST = "bad_request"
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    SERVER_ERROR = "server_error"
    NETWORK_ERROR = "network_error"
    TIMEOUT = "timeout"
    UNKNOWN = "unknown"


# ----------------------------------------------------------------------
# Raw transport outcomes raised by remote adapters


class RemoteFailure(Exception):
    """Structured failure response from the remote service."""

    def __init__(self, status_code: int, body: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(f"remote call failed with status {status_code}")
        self.status_code = status_code
        self.body = body


class TransportFailure(Exception):
    """Transport-level failure, no response was received."""

    NETWORK_UNREACHABLE: ClassVar[str] = "network-unreachable"
    TIMED_OUT: ClassVar[str] = "timed-out"

    def __init__(self, reason: str) -> None:
        if reason not in (self.NETWORK_UNREACHABLE, self.TIMED_OUT):
            raise ValueError(f"Unsupported transport failure: {reason}")
        super().__init__(reason)
        self.reason = reason


# ----------------------------------------------------------------------
# Classified errors


class DomainError(Exception):
    """Base class for classified assignment action errors."""

    kind: ClassVar[ErrorKind] = ErrorKind.UNKNOWN
    default_message: ClassVar[str] = "An unexpected error occurred. Please try again."

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        status_code: Optional[int] = None,
        code: Optional[str] = None,
        errors: Optional[List[ValidationError]] = None,
    ) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)
        self.status_code = status_code
        self.code = code
        self.errors: List[ValidationError] = list(errors or [])

    @property
    def is_validation_error(self) -> bool:
        return self.kind is ErrorKind.VALIDATION or bool(self.errors)

    def field_errors(self) -> Dict[str, str]:
        """Assignment-level validation messages keyed by field name."""
        return field_errors(self.errors)

    def question_errors(self) -> Dict[str, str]:
        """Question-level validation messages keyed by question id."""
        return question_errors(self.errors)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(message={self.message!r}, "
            f"status_code={self.status_code!r}, code={self.code!r})"
        )


class ValidationFailed(DomainError):
    kind = ErrorKind.VALIDATION
    default_message = "Validation failed. Please fix the errors and try again."


class BadRequest(DomainError):
    kind = ErrorKind.BAD_REQUEST
    default_message = "Invalid request. Please check your input and try again."


class Unauthenticated(DomainError):
    kind = ErrorKind.UNAUTHENTICATED
    default_message = "You are not authenticated. Please log in and try again."


class Forbidden(DomainError):
    kind = ErrorKind.FORBIDDEN
    default_message = "You do not have permission to perform this action."


class NotFound(DomainError):
    kind = ErrorKind.NOT_FOUND
    default_message = "Assignment not found."


class Conflict(DomainError):
    """The assignment is already published; callers should refresh it."""

    kind = ErrorKind.CONFLICT
    default_message = "This assignment has already been published."


class ServerError(DomainError):
    kind = ErrorKind.SERVER_ERROR
    default_message = "Server error. Please try again later."


class NetworkError(DomainError):
    kind = ErrorKind.NETWORK_ERROR
    default_message = "Network error. Please check your connection and try again."


class RequestTimeout(DomainError):
    kind = ErrorKind.TIMEOUT
    default_message = "Request timed out. Please try again."


class UnknownError(DomainError):
    kind = ErrorKind.UNKNOWN


__all__ = [
    "BadRequest",
    "Conflict",
    "DomainError",
    "ErrorKind",
    "Forbidden",
    "NetworkError",
    "NotFound",
    "RemoteFailure",
    "RequestTimeout",
    "ServerError",
    "TransportFailure",
    "Unauthenticated",
    "UnknownError",
    "ValidationFailed",
]
