"""Derive fleet metrics from a raw snapshot."""

from agentmetrics.contracts.metrics import BucketMetrics, CollectResult
from agentmetrics.contracts.snapshot import AgentCounts, JobCounts, RawSnapshot

_NO_JOBS = JobCounts()
_NO_AGENTS = AgentCounts()


def busy_percentage(busy: int, total: int) -> int:
    """Busy share of the agent pool in percent, rounded half up."""
    if total == 0:
        return 0
    return (200 * busy + total) // (2 * total)


def required_agents(scheduled: int, total_agents: int) -> int:
    """
    Estimate how many more agents the scheduled backlog needs.

    Any scheduled job asks for at least one more agent, even when the current
    headcount nominally covers the backlog. Beyond that floor the estimate
    grows with the shortfall.
    """
    if scheduled == 0:
        return 0
    return max(scheduled - total_agents, 1)


def derive_bucket(jobs: JobCounts, agents: AgentCounts) -> BucketMetrics:
    """Derive one bucket of metrics from job and agent counts."""
    return BucketMetrics(
        running_jobs=jobs.running,
        scheduled_jobs=jobs.scheduled,
        waiting_jobs=jobs.waiting,
        unfinished_jobs=jobs.scheduled + jobs.running,
        total_agents=agents.total,
        busy_agents=agents.busy,
        idle_agents=agents.idle,
        busy_agent_percentage=busy_percentage(agents.busy, agents.total),
        binti_required_agents=required_agents(jobs.scheduled, agents.total),
    )


def derive(snapshot: RawSnapshot, queue: str | None = None) -> CollectResult:
    """
    Derive metrics from a snapshot.

    Without ``queue`` the snapshot covers the whole fleet: totals come from
    the top-level counts and every queue named under either ``jobs.queues``
    or ``agents.queues`` gets a bucket. With ``queue`` the endpoint already
    scoped the top-level counts to that queue, so they become its only bucket.
    """
    if queue:
        return CollectResult(
            queues={queue: derive_bucket(snapshot.jobs, snapshot.agents)}
        )

    job_queues = snapshot.jobs.queues
    agent_queues = snapshot.agents.queues
    names = set(job_queues) | set(agent_queues)

    return CollectResult(
        totals=derive_bucket(snapshot.jobs, snapshot.agents),
        queues={
            name: derive_bucket(
                job_queues.get(name, _NO_JOBS),
                agent_queues.get(name, _NO_AGENTS),
            )
            for name in sorted(names)
        },
    )


__all__ = [
    "busy_percentage",
    "derive",
    "derive_bucket",
    "required_agents",
]
