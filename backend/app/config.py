"""
Bootstrap configuration loaded from environment variables.
"""
from functools import lru_cache
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.models.replica_set import (
    DEFAULT_MEMBERS,
    DEFAULT_REPLICA_SET_NAME,
    ReplicaSetSpec,
)


class Settings(BaseSettings):
    """Bootstrap settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # MongoDB instance that receives replSetInitiate
    mongo_uri: str = "mongodb://mongo1:27017"
    server_selection_timeout_ms: int = 30000

    # Replica set layout; REPLICA_SET_MEMBERS is parsed as JSON
    replica_set_name: str = DEFAULT_REPLICA_SET_NAME
    replica_set_members: list[dict[str, Any]] = Field(
        default_factory=lambda: [dict(m) for m in DEFAULT_MEMBERS]
    )

    # Post-initiation election wait
    wait_for_primary: bool = True
    primary_wait_timeout_seconds: float = 60.0
    status_poll_interval_seconds: float = 1.0

    # Logging
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def build_replica_set_spec(settings: Settings) -> ReplicaSetSpec:
    """Validate the configured layout into a ReplicaSetSpec."""
    return ReplicaSetSpec(
        _id=settings.replica_set_name,
        members=settings.replica_set_members,
    )
