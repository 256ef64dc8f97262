"""Raw metrics snapshot payloads as returned by the fleet endpoint."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _queues_or_empty(value: Any) -> Any:
    if value is None:
        return {}
    if isinstance(value, dict):
        return {
            name: {} if counts is None else counts for name, counts in value.items()
        }
    return value


class Organization(BaseModel):
    """Organization the snapshot belongs to."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    slug: str | None = None


class JobCounts(BaseModel):
    """Job counts for the whole fleet or a single queue.

    ``total`` is informational only; unfinished work is always recomputed
    from ``scheduled`` and ``running``.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    scheduled: int = Field(default=0, ge=0)
    running: int = Field(default=0, ge=0)
    waiting: int = Field(default=0, ge=0)
    total: int = Field(default=0, ge=0)
    queues: dict[str, "JobCounts"] = Field(default_factory=dict)

    @field_validator("scheduled", "running", "waiting", "total", mode="before")
    @classmethod
    def _zero_if_null(cls, value: Any) -> Any:
        return 0 if value is None else value

    @field_validator("queues", mode="before")
    @classmethod
    def _parse_queues(cls, value: Any) -> Any:
        return _queues_or_empty(value)


class AgentCounts(BaseModel):
    """Agent counts for the whole fleet or a single queue."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    idle: int = Field(default=0, ge=0)
    busy: int = Field(default=0, ge=0)
    total: int = Field(default=0, ge=0)
    queues: dict[str, "AgentCounts"] = Field(default_factory=dict)

    @field_validator("idle", "busy", "total", mode="before")
    @classmethod
    def _zero_if_null(cls, value: Any) -> Any:
        return 0 if value is None else value

    @field_validator("queues", mode="before")
    @classmethod
    def _parse_queues(cls, value: Any) -> Any:
        return _queues_or_empty(value)


class RawSnapshot(BaseModel):
    """Fleet snapshot.

    Any count missing from the payload (or sent as ``null``) decodes to zero,
    and a missing ``jobs``/``agents`` object decodes to all-zero counts.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    organization: Organization = Field(default_factory=Organization)
    jobs: JobCounts = Field(default_factory=JobCounts)
    agents: AgentCounts = Field(default_factory=AgentCounts)

    @field_validator("organization", "jobs", "agents", mode="before")
    @classmethod
    def _empty_if_null(cls, value: Any) -> Any:
        return {} if value is None else value


__all__ = [
    "AgentCounts",
    "JobCounts",
    "Organization",
    "RawSnapshot",
]
