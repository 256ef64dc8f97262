"""Collect derived metrics from the fleet metrics endpoint."""

import asyncio
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

import aiohttp

from agentmetrics.config import Settings, get_settings
from agentmetrics.contracts.metrics import BucketMetrics, CollectResult
from agentmetrics.engine.aggregator import derive
from agentmetrics.engine.fetcher import MetricsAPI

logger = logging.getLogger(__name__)


def _unique(queues: Iterable[str]) -> tuple[str, ...]:
    seen: dict[str, None] = {}
    for queue in queues:
        if queue:
            seen.setdefault(queue, None)
    return tuple(seen)


@dataclass
class Collector:
    """
    Collects fleet metrics from one endpoint.

    With no ``queues`` a single request covers the whole fleet and the result
    carries totals plus one bucket per queue seen in the snapshot. With one or
    more ``queues`` each is requested on its own and the result carries only
    those queue buckets.

    Example:
        collector = Collector(
            endpoint="https://agent.buildkite.com/v3",
            token=token,
            user_agent="my-autoscaler/1.0",
            queues=["deploy"],
        )
        result = await collector.collect()
        result.queues["deploy"].binti_required_agents
    """

    endpoint: str
    token: str | None
    user_agent: str
    queues: tuple[str, ...] = ()
    timeout: float | None = None
    debug_http: bool = False
    session: aiohttp.ClientSession | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if isinstance(self.queues, str):
            self.queues = (self.queues,)
        self.queues = _unique(self.queues)

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "Collector":
        """Build a collector from configuration."""
        settings = settings or get_settings()
        return cls(
            endpoint=settings.endpoint,
            token=settings.token,
            user_agent=settings.user_agent,
            queues=tuple(settings.queues),
            timeout=settings.timeout,
            debug_http=settings.debug_http,
        )

    async def collect(self) -> CollectResult:
        """
        Fetch and derive metrics.

        Any error aborts the whole collect; no partial result is returned.
        """
        async with MetricsAPI(
            self.endpoint,
            self.token,
            self.user_agent,
            timeout=self.timeout,
            debug_http=self.debug_http,
            session=self.session,
        ) as api:
            if not self.queues:
                logger.debug("Collecting metrics for all queues")
                return derive(await api.fetch())

            buckets: dict[str, BucketMetrics] = {}
            for queue in self.queues:
                logger.debug("Collecting metrics for queue '%s'", queue)
                result = derive(await api.fetch(queue), queue)
                buckets.update(result.queues)
            return CollectResult(queues=buckets)

    def collect_sync(self) -> CollectResult:
        """Sync version of collect for callers without an event loop."""
        return asyncio.run(self.collect())


async def collect(
    endpoint: str,
    token: str | None,
    user_agent: str,
    queues: str | Iterable[str] = (),
    *,
    timeout: float | None = None,
) -> CollectResult:
    """Collect metrics once from ``endpoint``.

    ``queues`` may be a single queue name or an iterable of names.
    """
    if isinstance(queues, str):
        queues = (queues,)
    collector = Collector(
        endpoint=endpoint,
        token=token,
        user_agent=user_agent,
        queues=tuple(queues),
        timeout=timeout,
    )
    return await collector.collect()


__all__ = [
    "Collector",
    "collect",
]
