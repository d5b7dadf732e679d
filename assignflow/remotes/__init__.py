"""Remote service factory and adapters."""

from __future__ import annotations

import os
from typing import Optional

from ..config import AssignflowConfig, load_config
from .base import AssignmentRemote
from .http import HttpAssignmentRemote
from .inmemory import InMemoryAssignmentRemote


def get_remote(
    backend: Optional[str] = None, config: Optional[AssignflowConfig] = None
) -> AssignmentRemote:
    """Factory function to get the configured remote service."""

    config = config or load_config()
    backend = (
        backend
        or os.getenv("ASSIGNFLOW_REMOTE")
        or config.remote.backend
    ).lower()

    if backend == "inmemory":
        return InMemoryAssignmentRemote()
    elif backend == "http":
        http_conf = config.remote.http
        return HttpAssignmentRemote(
            base_url=http_conf.base_url,
            token=http_conf.token,
            timeout=http_conf.timeout,
        )
    else:
        raise ValueError(f"Unsupported remote backend: {backend}")


__all__ = [
    "AssignmentRemote",
    "HttpAssignmentRemote",
    "InMemoryAssignmentRemote",
    "get_remote",
]
