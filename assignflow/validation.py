"""Index helpers over flat lists of scoped validation errors."""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from .contracts import AssignmentFieldError, QuestionError, ValidationError


def field_errors(errors: Sequence[ValidationError]) -> Dict[str, str]:
    """Map assignment field name to message; the last entry for a field wins."""
    return {
        error.field: error.message
        for error in errors
        if isinstance(error, AssignmentFieldError)
    }


def question_errors(errors: Sequence[ValidationError]) -> Dict[str, str]:
    """Map question id to message; the last entry for a question wins."""
    return {
        error.question_id: error.message
        for error in errors
        if isinstance(error, QuestionError)
    }


def without(
    errors: Sequence[ValidationError],
    field: Optional[str] = None,
    question_id: Optional[str] = None,
) -> List[ValidationError]:
    """Return ``errors`` minus the entries matching ``field`` or ``question_id``.

    Entries of the other scope are never touched. With neither key given the
    input is returned unchanged.
    """

    def _matches(error: ValidationError) -> bool:
        if field and isinstance(error, AssignmentFieldError):
            return error.field == field
        if question_id and isinstance(error, QuestionError):
            return error.question_id == question_id
        return False

    return [error for error in errors if not _matches(error)]
