from __future__ import annotations

import json
from collections.abc import Callable, Iterator
from typing import Any

import pytest
from agentmetrics.config import get_settings

_BASE_URL = "http://fleet.test/v3"

RawResponse = tuple[int, bytes] | BaseException


class _ResponseStub:
    def __init__(self, *, status: int = 200, body: bytes = b"") -> None:
        self.status = status
        self._body = body

    async def __aenter__(self) -> "_ResponseStub":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: Any,
    ) -> None:
        return None

    async def read(self) -> bytes:
        return self._body


class _SessionStub:
    """Routes GET requests by (path, queue name); unknown routes answer 404."""

    def __init__(self, routes: dict[tuple[str, str | None], RawResponse]) -> None:
        self._routes = routes
        self.calls: list[dict[str, Any]] = []
        self.closed = False

    def get(self, url: str, **kwargs: Any) -> _ResponseStub:
        self.calls.append({"url": url, **kwargs})
        path = url.removeprefix(_BASE_URL)
        name = (kwargs.get("params") or {}).get("name")
        response = self._routes.get((path, name), (404, b""))
        if isinstance(response, BaseException):
            raise response
        status, body = response
        return _ResponseStub(status=status, body=body)

    async def close(self) -> None:
        self.closed = True


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch, tmp_path) -> Iterator[None]:
    for key in (
        "AGENTMETRICS_ENDPOINT",
        "AGENTMETRICS_TOKEN",
        "AGENTMETRICS_USER_AGENT",
        "AGENTMETRICS_QUEUES",
        "AGENTMETRICS_TIMEOUT_SECONDS",
        "AGENTMETRICS_DEBUG_HTTP",
        "AGENTMETRICS_DEBUG",
    ):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def base_url() -> str:
    return _BASE_URL


@pytest.fixture
def fleet_session() -> Callable[..., _SessionStub]:
    """Build a session stub.

    ``global_payload`` answers ``/metrics`` and ``queue_payloads`` answers
    ``/metrics/queue?name=<queue>`` with JSON. ``responses`` maps
    ``(path, queue name)`` to a raw ``(status, body bytes)`` pair or to an
    exception raised when the request is made.
    """

    def _build(
        global_payload: dict[str, Any] | None = None,
        queue_payloads: dict[str, dict[str, Any]] | None = None,
        responses: dict[tuple[str, str | None], RawResponse] | None = None,
    ) -> _SessionStub:
        routes: dict[tuple[str, str | None], RawResponse] = {}
        if global_payload is not None:
            routes[("/metrics", None)] = (200, json.dumps(global_payload).encode())
        for name, payload in (queue_payloads or {}).items():
            routes[("/metrics/queue", name)] = (200, json.dumps(payload).encode())
        routes.update(responses or {})
        return _SessionStub(routes)

    return _build


@pytest.fixture
def fleet_payload() -> dict[str, Any]:
    return {
        "organization": {"slug": "test"},
        "jobs": {
            "scheduled": 3,
            "running": 1,
            "total": 4,
            "waiting": 2,
            "queues": {
                "default": {"scheduled": 2, "running": 1, "total": 3},
                "deploy": {"scheduled": 1, "running": 0, "total": 1, "waiting": 1},
                "binti": {"scheduled": 1, "running": 1},
            },
        },
        "agents": {
            "idle": 0,
            "busy": 2,
            "total": 2,
            "queues": {
                "default": {"idle": 0, "busy": 1, "total": 1},
                "binti": {"busy": 1, "idle": 0, "total": 1},
            },
        },
    }


@pytest.fixture
def deploy_payload() -> dict[str, Any]:
    return {
        "organization": {"slug": "test"},
        "jobs": {"scheduled": 3, "running": 1, "waiting": 1, "total": 4},
        "agents": {"idle": 0, "busy": 1, "total": 1},
    }
