# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Retry policy for request execution.

The policy is pure: given a classified error and the attempt number it
decides whether to retry and how long to wait. Only transient failures are
retried (network errors and 5xx responses). Client errors, timeouts and
caller cancellations are always terminal.

Attempt numbering is 1-based everywhere: ``attempt`` 1 is the first request,
and the delay before the first retry is computed with ``attempt`` 1.
"""

from __future__ import annotations

from dataclasses import dataclass

from .config import (
    DEFAULT_RETRY_DELAY_MS,
    ClientConfig,
    RetryBackoff,
    RetryDelayFn,
)
from .exceptions import StromboliError


@dataclass(frozen=True)
class RetryDecision:
    """Outcome of RetryPolicy.decide() for one failed attempt."""

    should_retry: bool
    delay_ms: float = 0.0


@dataclass(frozen=True)
class RetryPolicy:
    """
    Bounded retry policy with fixed, linear or exponential backoff.

    Attributes:
        retries: Number of retries allowed after the first attempt
        base_delay_ms: Base delay for the built-in backoff modes
        backoff: Built-in backoff mode
        delay_fn: Custom delay function; when set it replaces the built-in
            modes and is called as ``delay_fn(attempt, 1000)``

    Example:
        >>> policy = RetryPolicy(retries=3, base_delay_ms=500)
        >>> [policy.compute_delay_ms(n) for n in (1, 2, 3)]
        [500, 1000, 2000]
    """

    retries: int = 0
    base_delay_ms: float = DEFAULT_RETRY_DELAY_MS
    backoff: RetryBackoff = RetryBackoff.EXPONENTIAL
    delay_fn: RetryDelayFn | None = None

    @classmethod
    def from_config(cls, config: ClientConfig) -> RetryPolicy:
        return cls(
            retries=config.retries,
            base_delay_ms=config.retry_delay_ms,
            backoff=config.retry_backoff,
            delay_fn=config.retry_delay,
        )

    def should_retry(self, error: StromboliError, attempt: int) -> bool:
        """True if ``attempt`` is within budget and the error is transient."""
        return attempt <= self.retries and error.is_retryable

    def compute_delay_ms(self, attempt: int) -> float:
        """Delay before retry number ``attempt`` (1-based)."""
        if self.delay_fn is not None:
            return self.delay_fn(attempt, DEFAULT_RETRY_DELAY_MS)
        if self.backoff is RetryBackoff.LINEAR:
            return self.base_delay_ms * attempt
        if self.backoff is RetryBackoff.FIXED:
            return self.base_delay_ms
        return self.base_delay_ms * 2 ** (attempt - 1)

    def decide(self, error: StromboliError, attempt: int) -> RetryDecision:
        if not self.should_retry(error, attempt):
            return RetryDecision(should_retry=False)
        return RetryDecision(
            should_retry=True, delay_ms=max(0.0, self.compute_delay_ms(attempt))
        )


__all__ = ["RetryDecision", "RetryPolicy"]
