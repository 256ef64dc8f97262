"""Payload and result contracts."""

from agentmetrics.contracts.metrics import BucketMetrics, CollectResult, MetricName
from agentmetrics.contracts.snapshot import (
    AgentCounts,
    JobCounts,
    Organization,
    RawSnapshot,
)

__all__ = [
    "AgentCounts",
    "BucketMetrics",
    "CollectResult",
    "JobCounts",
    "MetricName",
    "Organization",
    "RawSnapshot",
]
