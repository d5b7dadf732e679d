from __future__ import annotations

import os
from typing import Literal, Optional

import yaml
from pydantic import BaseModel


class HttpRemoteConfig(BaseModel):
    """Configuration for the HTTP assignment service."""

    base_url: str = "http://localhost:8000/api/v1"
    timeout: float = 30.0
    token: Optional[str] = None


class RemoteConfig(BaseModel):
    """Remote backend selection."""

    backend: Literal["http", "inmemory"] = "http"
    http: HttpRemoteConfig = HttpRemoteConfig()


class GateConfig(BaseModel):
    """Publish confirmation gate settings."""

    grace_delay: float = 0.1
    close_on_failure: bool = False


class LoggingConfig(BaseModel):
    level: str = "INFO"


class AssignflowConfig(BaseModel):
    """Top-level configuration model."""

    remote: RemoteConfig = RemoteConfig()
    gate: GateConfig = GateConfig()
    logging: LoggingConfig = LoggingConfig()


def load_config(path: Optional[str] = None) -> AssignflowConfig:
    """Load configuration from YAML file.

    Args:
        path: Optional path to config file. Falls back to ASSIGNFLOW_CONFIG env
            variable or 'assignflow.yaml' in the current directory.
    """

    config_path = path or os.getenv("ASSIGNFLOW_CONFIG", "assignflow.yaml")
    if os.path.exists(config_path):
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
        config = AssignflowConfig(**data)
    else:
        config = AssignflowConfig()

    env_url = os.getenv("ASSIGNFLOW_API_URL")
    if env_url:
        config.remote.http.base_url = env_url
    env_token = os.getenv("ASSIGNFLOW_API_TOKEN")
    if env_token:
        config.remote.http.token = env_token
    return config
