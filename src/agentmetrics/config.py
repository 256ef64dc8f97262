"""agentmetrics configuration with sensible defaults."""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from agentmetrics._version import __version__

DEFAULT_ENDPOINT = "https://agent.buildkite.com/v3"
DEFAULT_USER_AGENT = f"agentmetrics/{__version__}"


class Settings(BaseSettings):
    """
    agentmetrics configuration.

    All settings can be overridden via environment variables with the
    AGENTMETRICS_ prefix. ``AGENTMETRICS_QUEUES`` takes a comma-separated list.
    """

    model_config = SettingsConfigDict(
        env_prefix="AGENTMETRICS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Verbose CLI logging, same as --verbose
    debug: bool = False

    # Fleet metrics endpoint and credentials
    endpoint: str = DEFAULT_ENDPOINT
    token: str | None = None
    user_agent: str = DEFAULT_USER_AGENT

    # Queues to collect; empty means the whole fleet
    queues: Annotated[list[str], NoDecode] = Field(default_factory=list)

    # Per-request timeout, 0 disables
    timeout_seconds: float = Field(default=15.0, ge=0)

    # Log raw requests and responses at debug level
    debug_http: bool = False

    @field_validator("queues", mode="before")
    @classmethod
    def _split_queues(cls, value: object) -> object:
        if value is None:
            return []
        if isinstance(value, str):
            return [q.strip() for q in value.split(",") if q.strip()]
        return value

    @property
    def timeout(self) -> float | None:
        """Request timeout in seconds, or None when disabled."""
        return self.timeout_seconds or None


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
