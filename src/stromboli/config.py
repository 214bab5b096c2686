# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Client configuration for the Stromboli client.

All durations are in milliseconds, matching the units used by the API and in
error messages ("Request timed out after 30000ms").
"""

from __future__ import annotations

import os
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .exceptions import ConfigurationError, StromboliError
from .types.operation import InterceptorResponse, RequestContext

DEFAULT_TIMEOUT_MS = 30000
DEFAULT_RETRIES = 0
DEFAULT_RETRY_DELAY_MS = 1000
DEFAULT_STREAM_CONNECTION_TIMEOUT_MS = 30000
DEFAULT_STREAM_IDLE_TIMEOUT_MS = 60000


class RetryBackoff(Enum):
    """How the retry delay grows with the retry number.

    - EXPONENTIAL: ``base * 2 ** (attempt - 1)`` (1s, 2s, 4s, ...)
    - LINEAR: ``base * attempt`` (1s, 2s, 3s, ...)
    - FIXED: ``base`` every time
    """

    EXPONENTIAL = "exponential"
    LINEAR = "linear"
    FIXED = "fixed"


# (attempt, base_delay_ms) -> delay_ms
RetryDelayFn = Callable[[int, int], float]

RequestHook = Callable[[RequestContext], Awaitable[None] | None]
ResponseHook = Callable[[InterceptorResponse], Awaitable[None] | None]
ErrorHook = Callable[[StromboliError], Awaitable[None] | None]


@dataclass
class ClientConfig:
    """
    Configuration for StromboliClient.

    Example:
        >>> config = ClientConfig(
        ...     base_url="http://localhost:8585",
        ...     retries=3,
        ...     retry_backoff=RetryBackoff.LINEAR,
        ... )
    """

    base_url: str
    """Base URL of the Stromboli API, e.g. ``http://localhost:8585``."""

    # === Request Execution ===

    timeout_ms: float = DEFAULT_TIMEOUT_MS
    """Per-attempt request timeout."""

    retries: int = DEFAULT_RETRIES
    """Retries after the first attempt for network errors and 5xx responses."""

    retry_delay_ms: float = DEFAULT_RETRY_DELAY_MS
    """Base delay for the backoff calculation."""

    retry_backoff: RetryBackoff = RetryBackoff.EXPONENTIAL
    """Backoff mode used when ``retry_delay`` is not set."""

    retry_delay: RetryDelayFn | None = None
    """Custom delay function, called as ``retry_delay(attempt, 1000)``."""

    # === Interceptors ===

    on_request: RequestHook | None = None
    """Called before each attempt; may modify ``context.headers``."""

    on_response: ResponseHook | None = None
    """Called after each successful transport call."""

    on_error: ErrorHook | None = None
    """Called with every classified failure, including ones that are retried."""

    # === Streaming ===

    stream_connection_timeout_ms: float = DEFAULT_STREAM_CONNECTION_TIMEOUT_MS
    """Time allowed for the stream response to arrive."""

    stream_idle_timeout_ms: float = DEFAULT_STREAM_IDLE_TIMEOUT_MS
    """Maximum gap between chunks once the stream is open."""

    # === Misc ===

    headers: dict[str, str] = field(default_factory=dict)
    """Static headers added to every request."""

    metrics_enabled: bool = True
    """Record request and stream metrics in the global collector."""

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.base_url or not self.base_url.strip():
            raise ConfigurationError("base_url must not be empty")
        self.base_url = self.base_url.strip().rstrip("/")
        if isinstance(self.retry_backoff, str):
            self.retry_backoff = _parse_backoff(self.retry_backoff)
        if self.timeout_ms <= 0:
            raise ConfigurationError("timeout_ms must be positive")
        if self.retries < 0:
            raise ConfigurationError("retries must be at least 0")
        if self.retry_delay_ms < 0:
            raise ConfigurationError("retry_delay_ms must be at least 0")
        if self.stream_connection_timeout_ms <= 0:
            raise ConfigurationError("stream_connection_timeout_ms must be positive")
        if self.stream_idle_timeout_ms <= 0:
            raise ConfigurationError("stream_idle_timeout_ms must be positive")

    @classmethod
    def from_env(cls, **overrides: Any) -> ClientConfig:
        """
        Build a configuration from ``STROMBOLI_*`` environment variables.

        Recognized variables: STROMBOLI_URL, STROMBOLI_TIMEOUT_MS,
        STROMBOLI_RETRIES, STROMBOLI_RETRY_DELAY_MS, STROMBOLI_RETRY_BACKOFF.
        Keyword overrides take precedence over the environment.
        """
        values: dict[str, Any] = {}
        env = os.environ

        if "STROMBOLI_URL" in env:
            values["base_url"] = env["STROMBOLI_URL"]
        if "STROMBOLI_TIMEOUT_MS" in env:
            values["timeout_ms"] = _env_number("STROMBOLI_TIMEOUT_MS", float)
        if "STROMBOLI_RETRIES" in env:
            values["retries"] = _env_number("STROMBOLI_RETRIES", int)
        if "STROMBOLI_RETRY_DELAY_MS" in env:
            values["retry_delay_ms"] = _env_number("STROMBOLI_RETRY_DELAY_MS", float)
        if "STROMBOLI_RETRY_BACKOFF" in env:
            values["retry_backoff"] = _parse_backoff(env["STROMBOLI_RETRY_BACKOFF"])

        values.update(overrides)
        if "base_url" not in values:
            raise ConfigurationError(
                "base_url is required (pass it or set STROMBOLI_URL)"
            )
        return cls(**values)


def _env_number(name: str, kind: type[int] | type[float]) -> Any:
    raw = os.environ[name]
    try:
        return kind(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from None


def _parse_backoff(value: str) -> RetryBackoff:
    try:
        return RetryBackoff(value.strip().lower())
    except ValueError:
        options = ", ".join(b.value for b in RetryBackoff)
        raise ConfigurationError(
            f"retry_backoff must be one of {options}, got {value!r}"
        ) from None


__all__ = [
    "DEFAULT_RETRIES",
    "DEFAULT_RETRY_DELAY_MS",
    "DEFAULT_STREAM_CONNECTION_TIMEOUT_MS",
    "DEFAULT_STREAM_IDLE_TIMEOUT_MS",
    "DEFAULT_TIMEOUT_MS",
    "ClientConfig",
    "ErrorHook",
    "RequestHook",
    "ResponseHook",
    "RetryBackoff",
    "RetryDelayFn",
]
