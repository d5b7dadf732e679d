"""In-memory assignment service for tests and offline use."""

from __future__ import annotations

import asyncio
import uuid
from collections import defaultdict, deque
from datetime import datetime, timezone
from typing import Any, Deque, Dict, List, Tuple

from ..contracts import (
    AssignmentFieldError,
    AssignmentPayload,
    AssignmentSnapshot,
    AssignmentStatus,
    PublishResponse,
    QuestionError,
    SaveDraftResponse,
)
from ..errors import RemoteFailure
from .base import AssignmentRemote


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class InMemoryAssignmentRemote(AssignmentRemote):
    """Dict-backed stand-in for the assignment service.

    Every call is recorded in :attr:`calls` as ``(operation, args)``. Failures
    can be scripted per operation with :meth:`queue_failure`, and ``latency``
    delays every call to make interleavings observable.
    """

    def __init__(self, latency: float = 0.0) -> None:
        self._assignments: Dict[str, AssignmentSnapshot] = {}
        self._failures: Dict[str, Deque[BaseException]] = defaultdict(deque)
        self._lock = asyncio.Lock()
        self.latency = latency
        self.calls: List[Tuple[str, Tuple[Any, ...]]] = []

    def queue_failure(self, operation: str, error: BaseException) -> None:
        """Make the next ``operation`` call raise ``error``."""
        self._failures[operation].append(error)

    def count(self, operation: str) -> int:
        return sum(1 for name, _ in self.calls if name == operation)

    async def _enter(self, operation: str, *args: Any) -> None:
        self.calls.append((operation, args))
        if self.latency:
            await asyncio.sleep(self.latency)
        if self._failures[operation]:
            raise self._failures[operation].popleft()

    def _get(self, assignment_id: str) -> AssignmentSnapshot:
        snapshot = self._assignments.get(assignment_id)
        if snapshot is None:
            raise RemoteFailure(
                404, {"code": "NOT_FOUND", "message": "Assignment not found."}
            )
        return snapshot

    def _store(
        self, assignment_id: str, payload: AssignmentPayload, **extra: Any
    ) -> AssignmentSnapshot:
        previous = self._assignments.get(assignment_id)
        now = _now()
        snapshot = AssignmentSnapshot(
            assignment_id=assignment_id,
            status=extra.get("status", AssignmentStatus.DRAFT),
            title=payload.basic_info.title,
            description=payload.basic_info.description,
            due_date=payload.basic_info.due_date,
            class_id=payload.class_id,
            questions=payload.questions,
            created_at=previous.created_at if previous else now,
            updated_at=now,
            published_at=extra.get("published_at"),
        )
        self._assignments[assignment_id] = snapshot
        return snapshot

    @staticmethod
    def _publish_errors(payload: AssignmentPayload) -> list:
        errors: list = []
        if not payload.basic_info.title.strip():
            errors.append(AssignmentFieldError(field="title", message="Title is required"))
        if not payload.questions:
            errors.append(
                AssignmentFieldError(
                    field="questions",
                    message="At least one question is required to publish",
                )
            )
        for question in payload.questions:
            if not question.content.strip():
                errors.append(
                    QuestionError(
                        question_id=question.id,
                        message="Question content is required",
                    )
                )
        return errors

    # ------------------------------------------------------------------
    async def create(self, payload: AssignmentPayload) -> SaveDraftResponse:
        await self._enter("create", payload)
        async with self._lock:
            snapshot = self._store(str(uuid.uuid4()), payload)
        return SaveDraftResponse(
            assignment_id=snapshot.assignment_id,
            status=snapshot.status,
            updated_at=snapshot.updated_at,
        )

    async def update(
        self, assignment_id: str, payload: AssignmentPayload
    ) -> SaveDraftResponse:
        await self._enter("update", assignment_id, payload)
        async with self._lock:
            if self._get(assignment_id).status == AssignmentStatus.PUBLISHED:
                raise RemoteFailure(409, {"code": "ALREADY_PUBLISHED"})
            snapshot = self._store(assignment_id, payload)
        return SaveDraftResponse(
            assignment_id=snapshot.assignment_id,
            status=snapshot.status,
            updated_at=snapshot.updated_at,
        )

    async def publish(
        self, assignment_id: str, payload: AssignmentPayload
    ) -> PublishResponse:
        await self._enter("publish", assignment_id, payload)
        async with self._lock:
            if self._get(assignment_id).status == AssignmentStatus.PUBLISHED:
                raise RemoteFailure(409, {"code": "ALREADY_PUBLISHED"})
            errors = self._publish_errors(payload)
            if errors:
                raise RemoteFailure(
                    422,
                    {
                        "code": "PUBLISH_VALIDATION_ERROR",
                        "errors": [error.to_wire() for error in errors],
                    },
                )
            snapshot = self._store(
                assignment_id,
                payload,
                status=AssignmentStatus.PUBLISHED,
                published_at=_now(),
            )
        return PublishResponse(
            assignment_id=snapshot.assignment_id,
            status=snapshot.status,
            published_at=snapshot.published_at,
        )

    async def load(self, assignment_id: str) -> AssignmentSnapshot:
        await self._enter("load", assignment_id)
        async with self._lock:
            return self._get(assignment_id)
