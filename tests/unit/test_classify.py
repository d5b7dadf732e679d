"""Error classification tests."""

import pytest

from assignflow.classify import classify, classify_response, parse_validation_errors
from assignflow.contracts import AssignmentFieldError, QuestionError
from assignflow.errors import (
    BadRequest,
    Conflict,
    ErrorKind,
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


@pytest.mark.parametrize(
    "status_code, expected",
    [
        (400, BadRequest),
        (401, Unauthenticated),
        (403, Forbidden),
        (404, NotFound),
        (409, Conflict),
        (422, ValidationFailed),
        (500, ServerError),
        (503, ServerError),
        (599, ServerError),
        (418, UnknownError),
    ],
)
def test_status_code_mapping(status_code, expected):
    error = classify(RemoteFailure(status_code))

    assert type(error) is expected
    assert error.status_code == status_code
    assert error.errors == []


def test_default_messages():
    assert classify(RemoteFailure(400)).message == (
        "Invalid request. Please check your input and try again."
    )
    assert classify(RemoteFailure(409)).message == (
        "This assignment has already been published."
    )
    assert classify(RemoteFailure(422)).message == (
        "Validation failed. Please fix the errors and try again."
    )
    assert classify(RemoteFailure(418)).message == (
        "An unexpected error occurred. Please try again."
    )


def test_body_message_overrides_default_and_code_is_kept():
    error = classify(RemoteFailure(403, {"code": "NOT_OWNER", "message": "Not yours"}))

    assert isinstance(error, Forbidden)
    assert error.message == "Not yours"
    assert error.code == "NOT_OWNER"


def test_unmapped_status_with_message_is_unknown():
    error = classify(RemoteFailure(418, {"message": "I am a teapot"}))

    assert error.kind is ErrorKind.UNKNOWN
    assert error.message == "I am a teapot"


def test_validation_errors_win_over_status_code():
    body = {
        "code": "PUBLISH_VALIDATION_ERROR",
        "errors": [
            {"scope": "assignment", "field": "title", "message": "Title is required"},
            {"scope": "question", "questionId": "q7", "message": "Add an answer"},
        ],
    }

    error = classify(RemoteFailure(400, body))

    assert isinstance(error, ValidationFailed)
    assert error.status_code == 400
    assert error.code == "PUBLISH_VALIDATION_ERROR"
    assert error.message == "Validation failed. Please fix the errors and try again."
    assert error.field_errors() == {"title": "Title is required"}
    assert error.question_errors() == {"q7": "Add an answer"}


def test_errors_array_forces_validation_even_when_entries_are_malformed():
    error = classify(
        RemoteFailure(400, {"errors": [{"field": "title", "message": "Title is required"}]})
    )

    assert error.kind is ErrorKind.VALIDATION
    assert error.is_validation_error
    assert error.errors == []
    assert error.field_errors() == {}


def test_only_validation_errors_report_is_validation_error():
    assert classify(RemoteFailure(422, {})).is_validation_error
    assert not classify(RemoteFailure(400, {"errors": []})).is_validation_error
    assert not classify(TransportFailure("timed-out")).is_validation_error


def test_empty_errors_array_does_not_force_validation():
    error = classify_response(400, {"errors": []})

    assert isinstance(error, BadRequest)


def test_non_mapping_body_is_ignored():
    error = classify_response(500, "<html>oops</html>")

    assert isinstance(error, ServerError)
    assert error.message == "Server error. Please try again later."


def test_transport_failures():
    network = classify(TransportFailure("network-unreachable"))
    timeout = classify(TransportFailure("timed-out"))

    assert isinstance(network, NetworkError)
    assert network.message == "Network error. Please check your connection and try again."
    assert network.status_code is None
    assert isinstance(timeout, RequestTimeout)
    assert timeout.kind is ErrorKind.TIMEOUT


def test_unsupported_transport_failure_reason():
    with pytest.raises(ValueError):
        TransportFailure("dns-melted")


def test_classified_error_passes_through():
    original = Conflict(code="INVALID_STATE")

    assert classify(original) is original


def test_arbitrary_exception_is_unknown():
    assert classify(KeyError("missing")).message == "'missing'"
    assert classify(RuntimeError()).message == (
        "An unexpected error occurred. Please try again."
    )


def test_malformed_validation_entries_are_dropped():
    parsed = parse_validation_errors(
        [
            {"scope": "assignment", "field": "title", "message": "Required"},
            {"scope": "question", "message": "missing question id"},
            {"scope": "unknown", "message": "bad scope"},
            "not a dict",
        ]
    )

    assert parsed == [AssignmentFieldError(field="title", message="Required")]
    assert not any(isinstance(item, QuestionError) for item in parsed)
    assert parse_validation_errors(None) == []
