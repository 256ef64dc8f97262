"""HTTP client for the fleet metrics endpoint."""

import asyncio
import logging
from typing import Any, Self

import aiohttp
from pydantic import ValidationError

from agentmetrics.contracts.snapshot import RawSnapshot
from agentmetrics.errors import DecodeError, TransportError, UnexpectedStatus

logger = logging.getLogger(__name__)

METRICS_PATH = "/metrics"
QUEUE_METRICS_PATH = "/metrics/queue"


def decode_snapshot(body: str | bytes, url: str) -> RawSnapshot:
    """Decode a response body into a snapshot, raising DecodeError if unusable."""
    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DecodeError(url, f"body is not valid UTF-8: {exc.reason}") from exc
    try:
        return RawSnapshot.model_validate_json(body)
    except ValidationError as exc:
        first = exc.errors()[0] if exc.errors() else {}
        loc = ".".join(str(part) for part in first.get("loc", ())) or "body"
        raise DecodeError(url, f"{loc}: {first.get('msg', exc)}") from exc


class MetricsAPI:
    """Client for one fleet metrics endpoint."""

    def __init__(
        self,
        endpoint: str,
        token: str | None,
        user_agent: str,
        *,
        timeout: float | None = None,
        debug_http: bool = False,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        """Initialize the client.

        A caller-supplied ``session`` stays owned by the caller and is not
        closed by ``close()``.
        """
        headers = {
            "Accept": "application/json",
            "User-Agent": user_agent,
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._headers = headers
        self._base_url = endpoint.rstrip("/")
        self._timeout = aiohttp.ClientTimeout(total=timeout) if timeout else None
        self._debug_http = debug_http
        self._session = session
        self._owns_session = session is None

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: Any,
    ) -> None:
        await self.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None or bool(getattr(self._session, "closed", False)):
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        session = self._session
        if session is None or not self._owns_session:
            return
        if not bool(getattr(session, "closed", False)):
            await session.close()
        self._session = None

    def url_for(self, queue: str | None = None) -> str:
        path = QUEUE_METRICS_PATH if queue else METRICS_PATH
        return f"{self._base_url}{path}"

    def _redacted_headers(self) -> dict[str, str]:
        headers = dict(self._headers)
        if "Authorization" in headers:
            headers["Authorization"] = "Bearer [REDACTED]"
        return headers

    async def fetch(self, queue: str | None = None) -> RawSnapshot:
        """
        Fetch one snapshot.

        Without ``queue`` the whole fleet is requested; otherwise the snapshot
        scoped to that queue.

        Raises:
            TransportError: The request failed before a response arrived.
            UnexpectedStatus: The endpoint answered with a non-2xx status.
            DecodeError: The body is not a valid snapshot.
        """
        url = self.url_for(queue)
        kwargs: dict[str, Any] = {"headers": self._headers}
        if queue:
            kwargs["params"] = {"name": queue}
        if self._timeout is not None:
            kwargs["timeout"] = self._timeout

        if self._debug_http:
            logger.debug(
                "GET %s params=%s headers=%s",
                url,
                kwargs.get("params"),
                self._redacted_headers(),
            )

        session = await self._ensure_session()
        try:
            async with session.get(url, **kwargs) as resp:
                status = resp.status
                body = await resp.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            logger.warning("Error fetching metrics from %s: %s", url, exc)
            raise TransportError(url, exc) from exc

        if self._debug_http:
            logger.debug(
                "Response %s from %s: %s",
                status,
                url,
                body.decode("utf-8", errors="replace"),
            )

        if not 200 <= status < 300:
            logger.warning("Unexpected status fetching metrics: %s %s", status, url)
            raise UnexpectedStatus(
                status, url, body.decode("utf-8", errors="replace")
            )

        snapshot = decode_snapshot(body, url)
        logger.debug(
            "Fetched metrics for %s",
            f"queue '{queue}'" if queue else "all queues",
        )
        return snapshot


async def fetch_snapshot(
    endpoint: str,
    token: str | None,
    user_agent: str,
    queue: str | None = None,
    *,
    session: aiohttp.ClientSession | None = None,
    timeout: float | None = None,
) -> RawSnapshot:
    """Fetch a single snapshot with a short-lived client."""
    async with MetricsAPI(
        endpoint,
        token,
        user_agent,
        timeout=timeout,
        session=session,
    ) as api:
        return await api.fetch(queue)


__all__ = [
    "METRICS_PATH",
    "MetricsAPI",
    "QUEUE_METRICS_PATH",
    "decode_snapshot",
    "fetch_snapshot",
]
