"""Pydantic models for configuration and data structures."""

import os
from typing import Literal

from pydantic import BaseModel, Field, HttpUrl, model_validator

from graphvault.constants import (
    DEFAULT_GRAPH_NAME,
    DEFAULT_MAX_RETRIES,
    DEFAULT_MAX_WORKERS,
    DEFAULT_RETRY_MAX_WAIT_SECONDS,
    DEFAULT_RETRY_MIN_WAIT_SECONDS,
    DEFAULT_TIMEOUT_SECONDS,
    MAX_BATCH_SIZE,
    MAX_WORKERS,
)


class HugeGraphConfig(BaseModel):
    """HugeGraph server connection configuration."""

    url: HttpUrl
    graph: str = Field(default=DEFAULT_GRAPH_NAME, min_length=1)
    username: str | None = None
    password: str | None = None
    timeout: int = Field(default=DEFAULT_TIMEOUT_SECONDS, ge=5, le=600)
    verify_ssl: bool = True


class RestoreConfig(BaseModel):
    """Configuration for restore execution.

    Controls the worker pool used for sharded vertex/edge dumps, the bulk batch
    size, and the retry policy applied to bulk uploads. Schema objects are
    always restored sequentially and without retry, regardless of these values.

    Examples:
        >>> # Default configuration (up to 8 workers, batches of 500)
        >>> config = RestoreConfig()

        >>> # Gentle restore against a busy server
        >>> config = RestoreConfig(workers=2, batch_size=200, max_retries=5)

        >>> # Keep going after a failed type and report everything at the end
        >>> config = RestoreConfig(stop_on_error=False)
    """

    workers: int = Field(
        default_factory=lambda: min(os.cpu_count() or 1, DEFAULT_MAX_WORKERS),
        ge=1,
        le=MAX_WORKERS,
        description="Number of worker threads processing dump files concurrently",
    )

    batch_size: int = Field(
        default=MAX_BATCH_SIZE,
        ge=1,
        le=MAX_BATCH_SIZE,
        description="Maximum vertices/edges per batch upload",
    )

    max_retries: int = Field(
        default=DEFAULT_MAX_RETRIES,
        ge=1,
        le=20,
        description="Maximum attempts per batch upload (transient errors only)",
    )

    retry_min_wait: float = Field(
        default=DEFAULT_RETRY_MIN_WAIT_SECONDS,
        ge=0,
        description="Minimum back-off between attempts in seconds",
    )

    retry_max_wait: float = Field(
        default=DEFAULT_RETRY_MAX_WAIT_SECONDS,
        ge=0,
        description="Maximum back-off between attempts in seconds",
    )

    stop_on_error: bool = Field(
        default=True,
        description="Stop starting new types once a type has failed",
    )

    @model_validator(mode="after")
    def validate_retry_wait(self) -> "RestoreConfig":
        """Ensure the back-off window is consistent.

        Returns:
            Validated RestoreConfig instance

        Raises:
            ValueError: If retry_min_wait > retry_max_wait
        """
        if self.retry_min_wait > self.retry_max_wait:
            raise ValueError(
                f"retry_min_wait ({self.retry_min_wait}) cannot exceed "
                f"retry_max_wait ({self.retry_max_wait})"
            )
        return self

    def __str__(self) -> str:
        """Return human-readable configuration summary."""
        return (
            f"RestoreConfig(workers={self.workers}, batch={self.batch_size}, "
            f"retries={self.max_retries}, stop_on_error={self.stop_on_error})"
        )


class OutputConfig(BaseModel):
    """Output formatting preferences for CLI commands."""

    default_format: Literal["table", "json"] = "table"


class Configuration(BaseModel):
    """Complete GraphVault configuration."""

    config_version: str = "1.0"
    hugegraph: HugeGraphConfig
    restore: RestoreConfig = Field(default_factory=RestoreConfig)
    output: OutputConfig = OutputConfig()


class ConnectionStatus(BaseModel):
    """Current state of connectivity to a HugeGraph server."""

    connected: bool
    authenticated: bool
    instance_url: str | None = None
    graph: str | None = None
    server_version: str | None = None
    api_version: str | None = None
    error_message: str | None = None
