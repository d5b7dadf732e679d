"""Base interface for the remote assignment service."""

from __future__ import annotations

import abc

from ..contracts import (
    AssignmentPayload,
    AssignmentSnapshot,
    PublishResponse,
    SaveDraftResponse,
)


class AssignmentRemote(metaclass=abc.ABCMeta):
    """Abstract remote operations consumed by the workflow engine.

    Implementations raise :class:`~assignflow.errors.RemoteFailure` for
    structured error responses and :class:`~assignflow.errors.TransportFailure`
    when no response could be obtained.
    """

    async def connect(self) -> None:
        """Open connection to the service (no-op by default)."""
        pass

    async def disconnect(self) -> None:
        """Release connection resources (no-op by default)."""
        pass

    @abc.abstractmethod
    async def create(self, payload: AssignmentPayload) -> SaveDraftResponse:
        """Create a new draft assignment."""
        raise NotImplementedError

    @abc.abstractmethod
    async def update(
        self, assignment_id: str, payload: AssignmentPayload
    ) -> SaveDraftResponse:
        """Save ``payload`` as the draft of an existing assignment."""
        raise NotImplementedError

    @abc.abstractmethod
    async def publish(
        self, assignment_id: str, payload: AssignmentPayload
    ) -> PublishResponse:
        """Publish an existing assignment."""
        raise NotImplementedError

    @abc.abstractmethod
    async def load(self, assignment_id: str) -> AssignmentSnapshot:
        """Fetch the full assignment."""
        raise NotImplementedError
