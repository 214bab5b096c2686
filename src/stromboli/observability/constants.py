# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Metric name constants following Prometheus naming conventions.

All metric names use the `stromboli_` prefix.

Naming Conventions:
    - Counter metrics end with `_total`
    - Histogram metrics for time end with `_seconds`
    - Gauges use present-tense descriptive names

Label Best Practices:
    Labels are limited to small, closed sets:
    - `operation` - Client operation name (health, run, get_job, ...)
    - `outcome` - "success" or an ErrorCode value
    - `event_type` - Stream event type (content, tool_use, error, done, ...)
    - `code` - ErrorCode value

    NEVER use job ids, session ids or request ids as label values.

Usage:
    >>> from stromboli.observability.constants import REQUESTS_TOTAL
    >>> print(REQUESTS_TOTAL)
    'stromboli_requests_total'
"""


# =============================================================================
# Global Prefix
# =============================================================================

METRIC_PREFIX = "stromboli"
"""Prefix for all Prometheus metrics in this library."""


# =============================================================================
# Request Metrics (executor.py)
# =============================================================================

REQUESTS_TOTAL = f"{METRIC_PREFIX}_requests_total"
"""Total logical requests by final outcome (retries count once)."""

REQUEST_RETRIES_TOTAL = f"{METRIC_PREFIX}_request_retries_total"
"""Total retry attempts scheduled after a transient failure."""

REQUEST_DURATION_SECONDS = f"{METRIC_PREFIX}_request_duration_seconds"
"""Duration of logical requests including retries (histogram)."""


# =============================================================================
# Streaming Metrics (streaming/reader.py)
# =============================================================================

STREAM_EVENTS_TOTAL = f"{METRIC_PREFIX}_stream_events_total"
"""Total stream events delivered to callers."""

STREAM_FAILURES_TOTAL = f"{METRIC_PREFIX}_stream_failures_total"
"""Total streams that ended in an error."""

STREAM_DURATION_SECONDS = f"{METRIC_PREFIX}_stream_duration_seconds"
"""Duration of streams from connect to close (histogram)."""

ACTIVE_STREAMS = f"{METRIC_PREFIX}_active_streams"
"""Number of currently open streams."""


# =============================================================================
# Polling Metrics (polling.py)
# =============================================================================

JOB_POLLS_TOTAL = f"{METRIC_PREFIX}_job_polls_total"
"""Total job status polls by outcome (pending, terminal, timeout)."""


# =============================================================================
# Histogram Buckets
# =============================================================================

LATENCY_BUCKETS: list[float] = [
    0.01,
    0.05,
    0.1,
    0.25,
    0.5,
    1.0,
    2.5,
    5.0,
    10.0,
    30.0,
    60.0,
]
"""Request duration buckets (in seconds, up to the default timeout and beyond)."""

STREAM_DURATION_BUCKETS: list[float] = [
    1.0,
    5.0,
    10.0,
    30.0,
    60.0,
    120.0,
    300.0,
    600.0,
    1200.0,
]
"""Stream duration buckets (in seconds, up to 20 minutes)."""


__all__ = [
    "ACTIVE_STREAMS",
    "JOB_POLLS_TOTAL",
    "LATENCY_BUCKETS",
    "METRIC_PREFIX",
    "REQUESTS_TOTAL",
    "REQUEST_DURATION_SECONDS",
    "REQUEST_RETRIES_TOTAL",
    "STREAM_DURATION_BUCKETS",
    "STREAM_DURATION_SECONDS",
    "STREAM_EVENTS_TOTAL",
    "STREAM_FAILURES_TOTAL",
]
