"""agentmetrics engine - fetching and deriving fleet metrics."""

from agentmetrics.engine.aggregator import derive, derive_bucket
from agentmetrics.engine.collector import Collector, collect
from agentmetrics.engine.fetcher import MetricsAPI, fetch_snapshot

__all__ = [
    # Collector
    "Collector",
    "collect",
    # Fetcher
    "MetricsAPI",
    "fetch_snapshot",
    # Aggregator
    "derive",
    "derive_bucket",
]
