"""Subscription interface for workflow outcomes."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import TYPE_CHECKING, Any, Callable, DefaultDict, List

if TYPE_CHECKING:
    from .contracts import PublishResponse, SaveDraftResponse
    from .errors import DomainError
    from .state import WorkflowState

logger = logging.getLogger(__name__)

SAVE_DRAFT_SUCCESS = "save_draft_success"
PUBLISH_SUCCESS = "publish_success"
ERROR = "error"
STATE_CHANGE = "state_change"

Unsubscribe = Callable[[], None]


class ActionEvents:
    """Holds subscribers and delivers workflow events to them synchronously.

    A failing subscriber is logged and skipped; it never interrupts delivery
    to the remaining subscribers nor the state transition that triggered it.
    """

    def __init__(self) -> None:
        self._subscribers: DefaultDict[str, List[Callable[..., Any]]] = defaultdict(list)

    def subscribe(self, event: str, callback: Callable[..., Any]) -> Unsubscribe:
        self._subscribers[event].append(callback)

        def _unsubscribe() -> None:
            if callback in self._subscribers[event]:
                self._subscribers[event].remove(callback)

        return _unsubscribe

    def on_save_draft_success(
        self, callback: Callable[["SaveDraftResponse"], Any]
    ) -> Unsubscribe:
        return self.subscribe(SAVE_DRAFT_SUCCESS, callback)

    def on_publish_success(
        self, callback: Callable[["PublishResponse"], Any]
    ) -> Unsubscribe:
        return self.subscribe(PUBLISH_SUCCESS, callback)

    def on_error(self, callback: Callable[["DomainError"], Any]) -> Unsubscribe:
        return self.subscribe(ERROR, callback)

    def on_state_change(
        self, callback: Callable[["WorkflowState", "WorkflowState"], Any]
    ) -> Unsubscribe:
        """Subscribe to every transition as ``callback(previous, current)``."""
        return self.subscribe(STATE_CHANGE, callback)

    def emit(self, event: str, *args: Any) -> None:
        for callback in list(self._subscribers[event]):
            try:
                callback(*args)
            except Exception as exc:
                logger.warning(f"Subscriber for {event} failed: {exc}")
