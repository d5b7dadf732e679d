"""Workflow state record for one assignment-editing session."""

from __future__ import annotations

from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict

from .contracts import AssignmentStatus, EntityRef, ValidationError, entity_ref
from .validation import field_errors, question_errors


class WorkflowState(BaseModel):
    """Snapshot of the draft/publish workflow.

    Instances are immutable; every transition produces a new snapshot via
    :meth:`evolve`. Derived flags are computed from the raw fields on every
    read so they can never diverge from them.
    """

    model_config = ConfigDict(frozen=True)

    assignment_id: Optional[str] = None
    status: AssignmentStatus = AssignmentStatus.DRAFT
    is_saving: bool = False
    is_publishing: bool = False
    error: Optional[str] = None
    validation_errors: Tuple[ValidationError, ...] = ()
    last_saved_at: Optional[str] = None
    published_at: Optional[str] = None

    def evolve(self, **changes) -> "WorkflowState":
        """Return a copy with ``changes`` applied."""
        if "validation_errors" in changes:
            changes["validation_errors"] = tuple(changes["validation_errors"])
        return self.model_copy(update=changes)

    @property
    def can_edit(self) -> bool:
        return self.status == AssignmentStatus.DRAFT

    @property
    def can_publish(self) -> bool:
        """Only drafts that are not already publishing can be published."""
        return self.status == AssignmentStatus.DRAFT and not self.is_publishing

    @property
    def is_loading(self) -> bool:
        return self.is_saving or self.is_publishing

    @property
    def entity_ref(self) -> EntityRef:
        return entity_ref(self.assignment_id)

    def field_errors(self) -> dict[str, str]:
        return field_errors(self.validation_errors)

    def question_errors(self) -> dict[str, str]:
        return question_errors(self.validation_errors)
