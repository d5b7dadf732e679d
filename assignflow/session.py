"""Start editing sessions for assignments that already exist remotely."""

from __future__ import annotations

import logging
from typing import Any, Optional, Tuple

from .classify import classify
from .contracts import AssignmentSnapshot
from .errors import DomainError
from .events import ActionEvents
from .orchestrator import AssignmentActions
from .remotes.base import AssignmentRemote

logger = logging.getLogger(__name__)


async def resume_session(
    remote: AssignmentRemote,
    assignment_id: str,
    events: Optional[ActionEvents] = None,
    **callbacks: Any,
) -> Tuple[AssignmentActions, AssignmentSnapshot]:
    """Load ``assignment_id`` and seed new actions with its identity and status.

    Returns the seeded actions together with the loaded snapshot.

    Raises:
        DomainError: If the assignment could not be loaded.
    """
    try:
        snapshot = await remote.load(assignment_id)
    except DomainError:
        raise
    except Exception as exc:
        error = classify(exc)
        logger.warning(f"Could not load assignment {assignment_id}: {error.message}")
        raise error from exc

    actions = AssignmentActions(remote, events=events, **callbacks)
    actions.set_assignment_id(snapshot.assignment_id)
    actions.set_status(snapshot.status)
    logger.info(
        f"Resumed assignment {snapshot.assignment_id} in status {snapshot.status.value}"
    )
    return actions, snapshot
