"""Derived fleet metrics exposed to exporters and autoscalers."""

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from enum import StrEnum
from types import MappingProxyType


class MetricName(StrEnum):
    """Names of the derived metrics, as published to exporters."""

    RUNNING_JOBS = "RunningJobsCount"
    SCHEDULED_JOBS = "ScheduledJobsCount"
    WAITING_JOBS = "WaitingJobsCount"
    UNFINISHED_JOBS = "UnfinishedJobsCount"
    TOTAL_AGENTS = "TotalAgentCount"
    BUSY_AGENTS = "BusyAgentCount"
    IDLE_AGENTS = "IdleAgentCount"
    BUSY_AGENT_PERCENTAGE = "BusyAgentPercentage"
    BINTI_REQUIRED_AGENTS = "BintiRequiredAgentCount"


@dataclass(frozen=True)
class BucketMetrics:
    """Derived metrics for the whole fleet or a single queue."""

    running_jobs: int = field(default=0, metadata={"name": MetricName.RUNNING_JOBS})
    scheduled_jobs: int = field(
        default=0, metadata={"name": MetricName.SCHEDULED_JOBS}
    )
    waiting_jobs: int = field(default=0, metadata={"name": MetricName.WAITING_JOBS})
    unfinished_jobs: int = field(
        default=0, metadata={"name": MetricName.UNFINISHED_JOBS}
    )
    total_agents: int = field(default=0, metadata={"name": MetricName.TOTAL_AGENTS})
    busy_agents: int = field(default=0, metadata={"name": MetricName.BUSY_AGENTS})
    idle_agents: int = field(default=0, metadata={"name": MetricName.IDLE_AGENTS})
    busy_agent_percentage: int = field(
        default=0, metadata={"name": MetricName.BUSY_AGENT_PERCENTAGE}
    )
    binti_required_agents: int = field(
        default=0, metadata={"name": MetricName.BINTI_REQUIRED_AGENTS}
    )

    def get(self, name: MetricName | str) -> int:
        """Look up a metric by its published name."""
        metric = MetricName(name)
        for f in fields(self):
            if f.metadata["name"] == metric:
                return getattr(self, f.name)
        raise KeyError(name)  # pragma: no cover

    def as_dict(self) -> dict[str, int]:
        """Name to value view, in ``MetricName`` order."""
        return {str(f.metadata["name"]): getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class CollectResult:
    """Result of one collect.

    ``totals`` is only set when the whole fleet was queried; a queue-scoped
    collect reports per-queue buckets only.
    """

    totals: BucketMetrics | None = None
    queues: Mapping[str, BucketMetrics] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "queues", MappingProxyType(dict(self.queues)))

    def totals_dict(self) -> dict[str, int]:
        if self.totals is None:
            return {}
        return self.totals.as_dict()

    def queues_dict(self) -> dict[str, dict[str, int]]:
        return {name: bucket.as_dict() for name, bucket in sorted(self.queues.items())}

    def as_dict(self) -> dict[str, object]:
        return {"totals": self.totals_dict(), "queues": self.queues_dict()}


__all__ = [
    "BucketMetrics",
    "CollectResult",
    "MetricName",
]
