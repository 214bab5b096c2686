# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Observability and metrics for the Stromboli client.

Classes:
    MetricsCollector: Metrics collector supporting dict snapshots and Prometheus.

Functions:
    get_metrics_collector: Get the global metrics collector singleton.
    reset_metrics_collector: Reset the global metrics collector singleton.

Constants:
    All metric name constants from constants module.
"""

from .collector import (
    METRIC_DEFINITIONS,
    MetricDefinition,
    MetricsCollector,
    get_metrics_collector,
    reset_metrics_collector,
)
from .constants import (
    ACTIVE_STREAMS,
    JOB_POLLS_TOTAL,
    LATENCY_BUCKETS,
    METRIC_PREFIX,
    REQUEST_DURATION_SECONDS,
    REQUEST_RETRIES_TOTAL,
    REQUESTS_TOTAL,
    STREAM_DURATION_BUCKETS,
    STREAM_DURATION_SECONDS,
    STREAM_EVENTS_TOTAL,
    STREAM_FAILURES_TOTAL,
)

__all__ = [
    # Gauges
    "ACTIVE_STREAMS",
    # Polling
    "JOB_POLLS_TOTAL",
    # Buckets
    "LATENCY_BUCKETS",
    "METRIC_DEFINITIONS",
    "METRIC_PREFIX",
    # Requests
    "REQUESTS_TOTAL",
    "REQUEST_DURATION_SECONDS",
    "REQUEST_RETRIES_TOTAL",
    "STREAM_DURATION_BUCKETS",
    # Streaming
    "STREAM_DURATION_SECONDS",
    "STREAM_EVENTS_TOTAL",
    "STREAM_FAILURES_TOTAL",
    "MetricDefinition",
    # Collector
    "MetricsCollector",
    "get_metrics_collector",
    "reset_metrics_collector",
]
