"""Save-draft and publish orchestration for a single assignment."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Dict, Optional, Union

from .classify import classify
from .contracts import (
    AssignmentPayload,
    AssignmentStatus,
    PublishResponse,
    SaveDraftResponse,
    Saved,
    Unsaved,
)
from .errors import Conflict, DomainError, UnknownError
from .events import (
    ERROR,
    PUBLISH_SUCCESS,
    SAVE_DRAFT_SUCCESS,
    STATE_CHANGE,
    ActionEvents,
)
from .remotes.base import AssignmentRemote
from .state import WorkflowState
from .validation import without

logger = logging.getLogger(__name__)

CANNOT_PUBLISH_MESSAGE = "Cannot publish at this time."
INVALID_STATE = "INVALID_STATE"


class AssignmentActions:
    """Drives an assignment through the draft and published states.

    The instance owns the only copy of :class:`WorkflowState` for one editing
    session and is its sole writer. ``save_draft`` and ``publish`` never raise
    for remote failures: the failure is classified, stored on the state,
    delivered to ``on_error`` subscribers and ``None`` is returned.

    Remote call sequences are serialized with a FIFO lock, so their results
    are applied in the order the calls were made and a save queued behind the
    very first save updates the created assignment instead of creating
    another one.
    """

    def __init__(
        self,
        remote: AssignmentRemote,
        assignment_id: Optional[str] = None,
        initial_status: Union[AssignmentStatus, str] = AssignmentStatus.DRAFT,
        events: Optional[ActionEvents] = None,
        on_save_draft_success: Optional[Callable[[SaveDraftResponse], Any]] = None,
        on_publish_success: Optional[Callable[[PublishResponse], Any]] = None,
        on_error: Optional[Callable[[DomainError], Any]] = None,
    ) -> None:
        self._remote = remote
        self._state = WorkflowState(
            assignment_id=assignment_id, status=AssignmentStatus(initial_status)
        )
        self.events = events or ActionEvents()
        if on_save_draft_success:
            self.events.on_save_draft_success(on_save_draft_success)
        if on_publish_success:
            self.events.on_publish_success(on_publish_success)
        if on_error:
            self.events.on_error(on_error)
        self._lock = asyncio.Lock()
        self._pending_saves = 0

    # ------------------------------------------------------------------
    # Derived state
    @property
    def state(self) -> WorkflowState:
        return self._state

    @property
    def remote(self) -> AssignmentRemote:
        return self._remote

    @property
    def can_edit(self) -> bool:
        return self._state.can_edit

    @property
    def can_publish(self) -> bool:
        return self._state.can_publish

    @property
    def is_loading(self) -> bool:
        return self._state.is_loading

    def field_errors(self) -> Dict[str, str]:
        return self._state.field_errors()

    def question_errors(self) -> Dict[str, str]:
        return self._state.question_errors()

    # ------------------------------------------------------------------
    # State helpers
    def _transition(self, **changes: Any) -> WorkflowState:
        previous = self._state
        self._state = previous.evolve(**changes)
        self.events.emit(STATE_CHANGE, previous, self._state)
        return self._state

    def _report_failure(self, exc: BaseException, action: str, **flags: Any) -> None:
        error = classify(exc)
        self._transition(
            error=error.message,
            validation_errors=error.errors if error.is_validation_error else (),
            **flags,
        )
        logger.warning(
            f"Failed to {action} assignment {self._state.assignment_id}: "
            f"{error.kind.value} ({error.message})"
        )
        self.events.emit(ERROR, error)

    # ------------------------------------------------------------------
    # Remote sequences
    async def _upsert(self, payload: AssignmentPayload) -> SaveDraftResponse:
        ref = self._state.entity_ref
        if isinstance(ref, Saved):
            logger.debug(f"Saving draft of assignment {ref.assignment_id}")
            return await self._remote.update(ref.assignment_id, payload)
        if isinstance(ref, Unsaved):
            logger.debug("Creating new assignment for draft")
            return await self._remote.create(payload)
        raise TypeError(f"Unexpected entity reference: {ref!r}")

    async def _ensure_created(self, payload: AssignmentPayload) -> str:
        ref = self._state.entity_ref
        if isinstance(ref, Saved):
            return ref.assignment_id
        if isinstance(ref, Unsaved):
            created = await self._remote.create(payload)
            self._transition(assignment_id=created.assignment_id)
            logger.info(f"Created assignment {created.assignment_id} before publishing")
            return created.assignment_id
        raise TypeError(f"Unexpected entity reference: {ref!r}")

    # ------------------------------------------------------------------
    # Actions
    async def save_draft(self, payload: AssignmentPayload) -> Optional[SaveDraftResponse]:
        """Create the assignment if it has no id yet, otherwise update it."""
        self._transition(error=None, validation_errors=(), is_saving=True)
        self._pending_saves += 1
        try:
            async with self._lock:
                response = await self._upsert(payload)
        except asyncio.CancelledError:
            self._pending_saves -= 1
            self._transition(is_saving=self._pending_saves > 0)
            raise
        except Exception as exc:
            self._pending_saves -= 1
            self._report_failure(exc, "save draft of", is_saving=self._pending_saves > 0)
            return None

        self._pending_saves -= 1
        self._transition(
            is_saving=self._pending_saves > 0,
            assignment_id=response.assignment_id,
            status=response.status,
            last_saved_at=response.updated_at,
            error=None,
            validation_errors=(),
        )
        logger.info(f"Saved draft of assignment {response.assignment_id}")
        self.events.emit(SAVE_DRAFT_SUCCESS, response)
        return response

    def _block_publish(self) -> Optional[DomainError]:
        state = self._state
        if state.can_publish:
            return None
        if state.status == AssignmentStatus.PUBLISHED:
            error: DomainError = Conflict(code=INVALID_STATE)
        else:
            error = UnknownError(CANNOT_PUBLISH_MESSAGE, code=INVALID_STATE)
        self._transition(error=error.message)
        logger.warning(
            f"Publish of assignment {state.assignment_id} blocked: {error.message}"
        )
        self.events.emit(ERROR, error)
        return error

    async def publish(self, payload: AssignmentPayload) -> Optional[PublishResponse]:
        """Publish the assignment, creating it first when it has no id.

        No remote call is made when the assignment is already published or a
        publish is in flight.
        """
        if self._block_publish() is not None:
            return None

        self._transition(error=None, validation_errors=(), is_publishing=True)
        try:
            async with self._lock:
                if self._state.status == AssignmentStatus.PUBLISHED:
                    raise Conflict(code=INVALID_STATE)
                assignment_id = await self._ensure_created(payload)
                response = await self._remote.publish(assignment_id, payload)
        except asyncio.CancelledError:
            self._transition(is_publishing=False)
            raise
        except Exception as exc:
            self._report_failure(exc, "publish", is_publishing=False)
            return None

        self._transition(
            is_publishing=False,
            assignment_id=response.assignment_id,
            status=response.status,
            published_at=response.published_at,
            error=None,
            validation_errors=(),
        )
        logger.info(f"Published assignment {response.assignment_id}")
        self.events.emit(PUBLISH_SUCCESS, response)
        return response

    # ------------------------------------------------------------------
    # Overrides and error management
    def set_status(self, status: Union[AssignmentStatus, str]) -> None:
        """Seed the status from an authoritative out-of-band source."""
        self._transition(status=AssignmentStatus(status))

    def set_assignment_id(self, assignment_id: Optional[str]) -> None:
        self._transition(assignment_id=assignment_id)

    def clear_errors(self) -> None:
        self._transition(error=None, validation_errors=())

    def clear_field_error(
        self, field: Optional[str] = None, question_id: Optional[str] = None
    ) -> None:
        """Dismiss the validation errors of one field or question."""
        self._transition(
            validation_errors=without(
                self._state.validation_errors, field=field, question_id=question_id
            )
        )
