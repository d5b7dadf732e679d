"""Client-side checks deciding whether an assignment may be saved or published."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Dict, Optional

from pydantic import BaseModel, Field

from .contracts import AssignmentPayload

TITLE_MIN_LENGTH = 3
TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 5000


class FormCheck(BaseModel):
    """Outcome of a client-side check, errors keyed by form field."""

    is_valid: bool
    errors: Dict[str, str] = Field(default_factory=dict)


def _title_error(title: str) -> Optional[str]:
    trimmed = title.strip()
    if not trimmed:
        return "Assignment title is required"
    if len(trimmed) < TITLE_MIN_LENGTH:
        return f"Title must be at least {TITLE_MIN_LENGTH} characters"
    if len(title) > TITLE_MAX_LENGTH:
        return f"Title cannot exceed {TITLE_MAX_LENGTH} characters"
    return None


def _description_error(description: str) -> Optional[str]:
    if len(description) > DESCRIPTION_MAX_LENGTH:
        return f"Description cannot exceed {DESCRIPTION_MAX_LENGTH} characters"
    return None


def _due_date_error(due_date: Optional[str], today: date) -> Optional[str]:
    if not due_date:
        return None
    try:
        parsed = datetime.fromisoformat(due_date.replace("Z", "+00:00"))
    except ValueError:
        return "Invalid date format"
    if parsed.date() < today:
        return "Due date cannot be in the past"
    return None


def _common_errors(payload: AssignmentPayload, today: Optional[date]) -> Dict[str, str]:
    today = today or datetime.now(timezone.utc).date()
    info = payload.basic_info
    checks = {
        "title": _title_error(info.title),
        "description": _description_error(info.description),
        "dueDate": _due_date_error(info.due_date, today),
    }
    return {name: message for name, message in checks.items() if message}


def validate_for_draft(
    payload: AssignmentPayload, today: Optional[date] = None
) -> FormCheck:
    """Minimal requirements for saving a draft."""
    errors = _common_errors(payload, today)
    return FormCheck(is_valid=not errors, errors=errors)


def validate_for_publish(
    payload: AssignmentPayload, today: Optional[date] = None
) -> FormCheck:
    """Full requirements for publishing: a class and at least one question."""
    errors = _common_errors(payload, today)
    if not payload.class_id:
        errors["classId"] = "Please select a class"
    if not payload.questions:
        errors["questions"] = "At least one question is required to publish"
    return FormCheck(is_valid=not errors, errors=errors)
