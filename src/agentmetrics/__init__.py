"""agentmetrics - Queue depth and agent capacity metrics for a job fleet."""

from agentmetrics._version import __version__
from agentmetrics.contracts import (
    BucketMetrics,
    CollectResult,
    MetricName,
    RawSnapshot,
)
from agentmetrics.engine import Collector, collect, derive
from agentmetrics.errors import (
    CollectError,
    DecodeError,
    TransportError,
    UnexpectedStatus,
)

__all__ = [
    "BucketMetrics",
    "CollectError",
    "CollectResult",
    "Collector",
    "DecodeError",
    "MetricName",
    "RawSnapshot",
    "TransportError",
    "UnexpectedStatus",
    "__version__",
    "collect",
    "derive",
]
