"""Assignflow: draft/publish workflow engine for assignments."""

from .classify import classify
from .contracts import (
    AssignmentFieldError,
    AssignmentPayload,
    AssignmentStatus,
    PublishResponse,
    QuestionError,
    SaveDraftResponse,
)
from .errors import DomainError, ErrorKind
from .events import ActionEvents
from .gate import DismissReason, GateState, PublishConfirmationGate
from .orchestrator import AssignmentActions
from .remotes import get_remote
from .session import resume_session
from .state import WorkflowState

__version__ = "0.1.0"
__all__ = [
    "ActionEvents",
    "AssignmentActions",
    "AssignmentFieldError",
    "AssignmentPayload",
    "AssignmentStatus",
    "DismissReason",
    "DomainError",
    "ErrorKind",
    "GateState",
    "PublishConfirmationGate",
    "PublishResponse",
    "QuestionError",
    "SaveDraftResponse",
    "WorkflowState",
    "classify",
    "get_remote",
    "resume_session",
]
