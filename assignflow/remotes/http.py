"""HTTP adapter for the assignment service."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from ..contracts import (
    AssignmentPayload,
    AssignmentSnapshot,
    PublishResponse,
    SaveDraftResponse,
)
from ..errors import RemoteFailure, TransportFailure
from .base import AssignmentRemote

logger = logging.getLogger(__name__)


class HttpAssignmentRemote(AssignmentRemote):
    """Talks to the assignment REST API.

    Endpoints:
        POST /assignments                  create a draft
        POST /assignments/{id}/draft       save a draft
        POST /assignments/{id}/publish     publish
        GET  /assignments/{id}             load
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000/api/v1",
        *,
        token: Optional[str] = None,
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self._client = http_client
        self._owns_client = http_client is None

    # ------------------------------------------------------------------
    # connection management
    # ------------------------------------------------------------------
    async def connect(self) -> None:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)

    async def disconnect(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------
    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    @staticmethod
    def _error_body(response: httpx.Response) -> Optional[Dict[str, Any]]:
        try:
            body = response.json()
        except ValueError:
            return None
        return body if isinstance(body, dict) else None

    async def _request(
        self, method: str, path: str, json: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        await self.connect()
        url = f"{self.base_url}{path}"
        logger.debug(f"{method} {url}")
        try:
            response = await self._client.request(
                method, url, json=json, headers=self._headers()
            )
        except httpx.TimeoutException as exc:
            logger.warning(f"{method} {url} timed out: {exc}")
            raise TransportFailure(TransportFailure.TIMED_OUT) from exc
        except httpx.TransportError as exc:
            logger.warning(f"{method} {url} failed: {exc}")
            raise TransportFailure(TransportFailure.NETWORK_UNREACHABLE) from exc

        if response.is_error:
            raise RemoteFailure(response.status_code, self._error_body(response))
        return response.json()

    # ------------------------------------------------------------------
    # remote operations
    # ------------------------------------------------------------------
    async def create(self, payload: AssignmentPayload) -> SaveDraftResponse:
        data = await self._request("POST", "/assignments", payload.to_wire())
        return SaveDraftResponse.model_validate(data)

    async def update(
        self, assignment_id: str, payload: AssignmentPayload
    ) -> SaveDraftResponse:
        data = await self._request(
            "POST", f"/assignments/{assignment_id}/draft", payload.to_wire()
        )
        return SaveDraftResponse.model_validate(data)

    async def publish(
        self, assignment_id: str, payload: AssignmentPayload
    ) -> PublishResponse:
        data = await self._request(
            "POST", f"/assignments/{assignment_id}/publish", payload.to_wire()
        )
        return PublishResponse.model_validate(data)

    async def load(self, assignment_id: str) -> AssignmentSnapshot:
        data = await self._request("GET", f"/assignments/{assignment_id}")
        return AssignmentSnapshot.model_validate(data)
