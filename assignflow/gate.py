"""Confirmation step guarding user-initiated publishes."""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Optional

from .contracts import AssignmentPayload, PublishResponse
from .orchestrator import AssignmentActions
from .state import WorkflowState

logger = logging.getLogger(__name__)


class GateState(str, Enum):
    CLOSED = "closed"
    OPEN = "open"


class DismissReason(str, Enum):
    CANCEL = "cancel"
    BACKDROP = "backdrop"
    ESCAPE = "escape"


class PublishConfirmationGate:
    """Open/closed confirmation wrapped around :meth:`AssignmentActions.publish`.

    The gate opens only for a publishable draft whose content is valid, can
    not be dismissed while the publish is in flight, and closes itself
    ``grace_delay`` seconds after the publish settles. A failed publish keeps
    the gate open so the error stays visible, unless ``close_on_failure`` is
    set.
    """

    def __init__(
        self,
        actions: AssignmentActions,
        grace_delay: float = 0.1,
        close_on_failure: bool = False,
    ) -> None:
        self._actions = actions
        self.grace_delay = grace_delay
        self.close_on_failure = close_on_failure
        self._state = GateState.CLOSED
        self._auto_close: Optional[asyncio.TimerHandle] = None
        self._unsubscribe = actions.events.on_state_change(self._on_state_change)

    @property
    def actions(self) -> AssignmentActions:
        return self._actions

    @property
    def state(self) -> GateState:
        return self._state

    @property
    def is_open(self) -> bool:
        return self._state is GateState.OPEN

    @property
    def is_publishing(self) -> bool:
        return self._actions.state.is_publishing

    def request_open(self, is_valid_for_publish: bool) -> bool:
        """Open the gate if the assignment may be published.

        Returns whether the gate is open afterwards.
        """
        if self.is_open:
            return True
        if not (self._actions.can_publish and is_valid_for_publish):
            logger.debug(
                f"Publish confirmation not opened (can_publish={self._actions.can_publish}, "
                f"valid={is_valid_for_publish})"
            )
            return False
        self._cancel_auto_close()
        self._state = GateState.OPEN
        logger.debug("Publish confirmation opened")
        return True

    def dismiss(self, reason: DismissReason = DismissReason.CANCEL) -> bool:
        """Close the gate on cancel, backdrop or escape; ignored while publishing."""
        if not self.is_open:
            return False
        if self.is_publishing:
            logger.debug(f"Ignoring {DismissReason(reason).value} while publishing")
            return False
        self._close()
        return True

    async def confirm(self, payload: AssignmentPayload) -> Optional[PublishResponse]:
        """Publish from inside the open gate."""
        if not self.is_open:
            logger.debug("Confirm ignored, publish confirmation is closed")
            return None
        return await self._actions.publish(payload)

    def detach(self) -> None:
        """Detach from the orchestrator and drop any pending auto-close."""
        self._cancel_auto_close()
        self._unsubscribe()

    # ------------------------------------------------------------------
    def _on_state_change(self, previous: WorkflowState, current: WorkflowState) -> None:
        if not (previous.is_publishing and not current.is_publishing):
            return
        if not self.is_open:
            return
        if current.error is not None and not self.close_on_failure:
            logger.debug("Publish failed, keeping confirmation open")
            return
        self._schedule_close()

    def _schedule_close(self) -> None:
        self._cancel_auto_close()
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self._close()
            return
        self._auto_close = loop.call_later(self.grace_delay, self._close)

    def _cancel_auto_close(self) -> None:
        if self._auto_close is not None:
            self._auto_close.cancel()
            self._auto_close = None

    def _close(self) -> None:
        self._cancel_auto_close()
        if self._state is GateState.OPEN:
            logger.debug("Publish confirmation closed")
        self._state = GateState.CLOSED
