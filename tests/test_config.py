from __future__ import annotations

import pytest
from agentmetrics import __version__
from agentmetrics.config import DEFAULT_ENDPOINT, Settings, get_settings
from pydantic import ValidationError


def test_defaults() -> None:
    settings = get_settings()

    assert settings.endpoint == DEFAULT_ENDPOINT
    assert settings.token is None
    assert settings.user_agent == f"agentmetrics/{__version__}"
    assert settings.queues == []
    assert settings.timeout == 15.0
    assert settings.debug_http is False
    assert settings.debug is False


def test_env_overrides(monkeypatch) -> None:
    monkeypatch.setenv("AGENTMETRICS_ENDPOINT", "http://fleet.test/v3")
    monkeypatch.setenv("AGENTMETRICS_TOKEN", "abc123")
    monkeypatch.setenv("AGENTMETRICS_QUEUES", "deploy,default, ,")
    monkeypatch.setenv("AGENTMETRICS_TIMEOUT_SECONDS", "0")
    monkeypatch.setenv("AGENTMETRICS_DEBUG_HTTP", "true")
    monkeypatch.setenv("AGENTMETRICS_DEBUG", "1")

    settings = Settings()

    assert settings.endpoint == "http://fleet.test/v3"
    assert settings.token == "abc123"
    assert settings.queues == ["deploy", "default"]
    assert settings.timeout is None
    assert settings.debug_http is True
    assert settings.debug is True


def test_env_file_is_read(tmp_path) -> None:
    (tmp_path / ".env").write_text("AGENTMETRICS_TOKEN=from-file\n")

    assert Settings().token == "from-file"


def test_get_settings_is_cached() -> None:
    assert get_settings() is get_settings()


def test_negative_timeout_rejected() -> None:
    with pytest.raises(ValidationError):
        Settings(timeout_seconds=-1)
