"""Tests for configuration loading."""

import pytest

from assignflow.config import load_config
from assignflow.remotes import get_remote
from assignflow.remotes.http import HttpAssignmentRemote
from assignflow.remotes.inmemory import InMemoryAssignmentRemote


def test_load_config_from_env(tmp_path, monkeypatch):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        """
remote:
  backend: inmemory
  http:
    base_url: https://school.example/api/v1
    timeout: 5
gate:
  grace_delay: 0.5
  close_on_failure: true
"""
    )
    monkeypatch.setenv("ASSIGNFLOW_CONFIG", str(config_path))
    monkeypatch.delenv("ASSIGNFLOW_API_URL", raising=False)

    config = load_config()
    assert config.remote.backend == "inmemory"
    assert config.remote.http.base_url == "https://school.example/api/v1"
    assert config.remote.http.timeout == 5.0
    assert config.gate.grace_delay == 0.5
    assert config.gate.close_on_failure is True
    assert config.logging.level == "INFO"


def test_missing_config_uses_defaults(tmp_path, monkeypatch):
    monkeypatch.delenv("ASSIGNFLOW_API_URL", raising=False)
    monkeypatch.delenv("ASSIGNFLOW_API_TOKEN", raising=False)

    config = load_config(str(tmp_path / "absent.yaml"))

    assert config.remote.backend == "http"
    assert config.gate.grace_delay == 0.1
    assert config.gate.close_on_failure is False


def test_env_overrides_http_settings(tmp_path, monkeypatch):
    monkeypatch.setenv("ASSIGNFLOW_API_URL", "https://override.example/api")
    monkeypatch.setenv("ASSIGNFLOW_API_TOKEN", "secret")

    config = load_config(str(tmp_path / "absent.yaml"))

    assert config.remote.http.base_url == "https://override.example/api"
    assert config.remote.http.token == "secret"


def test_get_remote_uses_config(tmp_path, monkeypatch):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        """
remote:
  backend: http
  http:
    base_url: https://confighost/api
    token: abc
"""
    )
    monkeypatch.setenv("ASSIGNFLOW_CONFIG", str(config_path))
    monkeypatch.delenv("ASSIGNFLOW_REMOTE", raising=False)
    monkeypatch.delenv("ASSIGNFLOW_API_URL", raising=False)
    monkeypatch.delenv("ASSIGNFLOW_API_TOKEN", raising=False)

    remote = get_remote()
    assert isinstance(remote, HttpAssignmentRemote)
    assert remote.base_url == "https://confighost/api"
    assert remote.token == "abc"


def test_get_remote_backend_argument(monkeypatch):
    monkeypatch.delenv("ASSIGNFLOW_REMOTE", raising=False)

    assert isinstance(get_remote("inmemory"), InMemoryAssignmentRemote)
    with pytest.raises(ValueError):
        get_remote("carrier-pigeon")
