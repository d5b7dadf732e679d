"""Map raw transport outcomes onto the :mod:`assignflow.errors` taxonomy."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Type

from pydantic import ValidationError as PydanticValidationError

from .contracts import ValidationError, validation_error_adapter
from .errors import (
    BadRequest,
    Conflict,
    DomainError,
    Forbidden,
    NetworkError,
    NotFound,
    RemoteFailure,
    RequestTimeout,
    ServerError,
    TransportFailure,
    Unauthenticated,
    UnknownError,
    ValidationFailed,
)

logger = logging.getLogger(__name__)

STATUS_KINDS: Dict[int, Type[DomainError]] = {
    400: BadRequest,
    401: Unauthenticated,
    403: Forbidden,
    404: NotFound,
    409: Conflict,
    422: ValidationFailed,
}


def parse_validation_errors(raw: Any) -> List[ValidationError]:
    """Parse a body ``errors`` array, dropping entries that are malformed."""
    if not isinstance(raw, list):
        return []
    parsed: List[ValidationError] = []
    for item in raw:
        try:
            parsed.append(validation_error_adapter.validate_python(item))
        except PydanticValidationError:
            logger.warning(f"Ignoring malformed validation error entry: {item!r}")
    return parsed


def _body_text(body: Mapping[str, Any], key: str) -> Optional[str]:
    value = body.get(key)
    if isinstance(value, str) and value:
        return value
    return None


def _kind_for_status(status_code: int) -> Optional[Type[DomainError]]:
    if status_code in STATUS_KINDS:
        return STATUS_KINDS[status_code]
    if 500 <= status_code <= 599:
        return ServerError
    return None


def classify_response(status_code: int, body: Any = None) -> DomainError:
    """Classify a structured failure response."""
    if not isinstance(body, Mapping):
        body = {}
    message = _body_text(body, "message")
    code = _body_text(body, "code")
    raw_errors = body.get("errors")

    # A non-empty errors array means validation even if no entry is usable
    if isinstance(raw_errors, list) and raw_errors:
        return ValidationFailed(
            message,
            status_code=status_code,
            code=code,
            errors=parse_validation_errors(raw_errors),
        )

    error_cls = _kind_for_status(status_code) or UnknownError
    return error_cls(message, status_code=status_code, code=code)


def classify(outcome: BaseException) -> DomainError:
    """Return the :class:`DomainError` describing ``outcome``.

    ``outcome`` is normally a :class:`RemoteFailure` or a
    :class:`TransportFailure` raised by a remote adapter. Errors that are
    already classified are returned unchanged and anything else becomes
    :class:`UnknownError`. The function performs no I/O.
    """
    if isinstance(outcome, DomainError):
        return outcome
    if isinstance(outcome, RemoteFailure):
        return classify_response(outcome.status_code, outcome.body)
    if isinstance(outcome, TransportFailure):
        if outcome.reason == TransportFailure.TIMED_OUT:
            return RequestTimeout()
        return NetworkError()
    return UnknownError(str(outcome) or None)
