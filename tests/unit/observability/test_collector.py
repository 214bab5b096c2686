# SPDX-License-Identifier: Apache-2.0
"""
Unit tests for the observability collector module.

Tests cover:
- MetricsCollector: dict snapshot and Prometheus registry updates
- Singleton pattern: get_metrics_collector, reset_metrics_collector
- Label cardinality protection
- Prometheus HTTP server startup
"""

from __future__ import annotations

from unittest.mock import patch

import pytest

from stromboli.observability.collector import (
    METRIC_DEFINITIONS,
    MetricsCollector,
    get_metrics_collector,
    reset_metrics_collector,
)
from stromboli.observability.constants import (
    ACTIVE_STREAMS,
    JOB_POLLS_TOTAL,
    REQUEST_DURATION_SECONDS,
    REQUESTS_TOTAL,
    STREAM_FAILURES_TOTAL,
)

# =============================================================================
# MetricDefinition Tests
# =============================================================================


class TestMetricDefinitions:
    """Test the predefined metric schema."""

    def test_predefined_metrics_exist(self) -> None:
        """Every metric name constant used by the client is defined."""
        assert REQUESTS_TOTAL in METRIC_DEFINITIONS
        assert REQUEST_DURATION_SECONDS in METRIC_DEFINITIONS
        assert ACTIVE_STREAMS in METRIC_DEFINITIONS
        assert JOB_POLLS_TOTAL in METRIC_DEFINITIONS

    def test_names_use_prefix(self) -> None:
        assert all(name.startswith("stromboli_") for name in METRIC_DEFINITIONS)

    def test_request_labels(self) -> None:
        defn = METRIC_DEFINITIONS[REQUESTS_TOTAL]
        assert defn.metric_type == "counter"
        assert defn.label_names == ("operation", "outcome")


# =============================================================================
# Snapshot Tests
# =============================================================================


class TestCounterOperations:
    """Test counter operations."""

    def test_inc_counter_basic(self, collector: MetricsCollector) -> None:
        collector.inc_counter(JOB_POLLS_TOTAL, labels={"outcome": "pending"})
        collector.inc_counter(JOB_POLLS_TOTAL, labels={"outcome": "pending"})
        assert collector.get_counter(JOB_POLLS_TOTAL, {"outcome": "pending"}) == 2

    def test_label_key_is_sorted(self, collector: MetricsCollector) -> None:
        """Label order does not matter."""
        collector.inc_counter(
            REQUESTS_TOTAL, labels={"outcome": "success", "operation": "health"}
        )
        counters = collector.get_metrics()["counters"][REQUESTS_TOTAL]
        assert counters == {"operation=health,outcome=success": 1}

    def test_negative_value_raises(self, collector: MetricsCollector) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            collector.inc_counter(REQUESTS_TOTAL, value=-1)

    def test_unknown_counter_is_zero(self, collector: MetricsCollector) -> None:
        assert collector.get_counter("stromboli_missing_total") == 0


class TestGaugeOperations:
    """Test gauge operations."""

    def test_inc_and_dec(self, collector: MetricsCollector) -> None:
        collector.inc_gauge(ACTIVE_STREAMS)
        collector.inc_gauge(ACTIVE_STREAMS)
        collector.dec_gauge(ACTIVE_STREAMS)
        assert collector.get_metrics()["gauges"][ACTIVE_STREAMS] == {"": 1.0}


class TestHistogramOperations:
    """Test histogram operations."""

    def test_summary_in_snapshot(self, collector: MetricsCollector) -> None:
        labels = {"operation": "run"}
        for value in (0.1, 0.3, 0.2):
            collector.observe_histogram(REQUEST_DURATION_SECONDS, value, labels)

        summary = collector.get_metrics()["histograms"][REQUEST_DURATION_SECONDS][
            "operation=run"
        ]
        assert summary["count"] == 3
        assert summary["min"] == pytest.approx(0.1)
        assert summary["max"] == pytest.approx(0.3)
        assert summary["avg"] == pytest.approx(0.2)

    def test_observation_memory_limit(self, collector: MetricsCollector) -> None:
        with patch.object(MetricsCollector, "MAX_HISTOGRAM_OBSERVATIONS", 10):
            for value in range(11):
                collector.observe_histogram(REQUEST_DURATION_SECONDS, float(value))

        summary = collector.get_metrics()["histograms"][REQUEST_DURATION_SECONDS][""]
        assert summary["count"] == 6


# =============================================================================
# Prometheus Integration
# =============================================================================


class TestPrometheus:
    """Test Prometheus registry updates."""

    def test_counter_exported(self, collector: MetricsCollector) -> None:
        labels = {"operation": "health", "outcome": "success"}
        collector.inc_counter(REQUESTS_TOTAL, labels=labels)
        value = collector.registry.get_sample_value(REQUESTS_TOTAL, labels)
        assert value == 1.0

    def test_gauge_exported(self, collector: MetricsCollector) -> None:
        collector.inc_gauge(ACTIVE_STREAMS)
        assert collector.registry.get_sample_value(ACTIVE_STREAMS) == 1.0

    def test_histogram_exported(self, collector: MetricsCollector) -> None:
        collector.observe_histogram(
            REQUEST_DURATION_SECONDS, 0.5, labels={"operation": "run"}
        )
        count = collector.registry.get_sample_value(
            f"{REQUEST_DURATION_SECONDS}_count", {"operation": "run"}
        )
        assert count == 1.0

    def test_collectors_have_separate_registries(self) -> None:
        """Two collectors can register the same metric names."""
        first = MetricsCollector()
        second = MetricsCollector()
        first.inc_counter(STREAM_FAILURES_TOTAL, labels={"code": "IDLE_TIMEOUT"})
        second.inc_counter(STREAM_FAILURES_TOTAL, labels={"code": "IDLE_TIMEOUT"})

        labels = {"code": "IDLE_TIMEOUT"}
        assert first.registry.get_sample_value(STREAM_FAILURES_TOTAL, labels) == 1.0
        assert second.registry.get_sample_value(STREAM_FAILURES_TOTAL, labels) == 1.0

    def test_disabled_prometheus_keeps_snapshot(self) -> None:
        collector = MetricsCollector(enable_prometheus=False)
        collector.inc_counter(JOB_POLLS_TOTAL, labels={"outcome": "terminal"})

        assert collector.prometheus_enabled is False
        assert collector.get_counter(JOB_POLLS_TOTAL, {"outcome": "terminal"}) == 1
        assert collector.registry.get_sample_value(
            JOB_POLLS_TOTAL, {"outcome": "terminal"}
        ) is None

    def test_start_http_server(self, collector: MetricsCollector) -> None:
        with patch(
            "stromboli.observability.collector.start_http_server"
        ) as mock_start:
            assert collector.start_http_server(port=9999) is True
            assert collector.start_http_server(port=9999) is True

        mock_start.assert_called_once_with(
            9999, addr="127.0.0.1", registry=collector.registry
        )
        assert collector.server_running is True

    def test_start_http_server_failure(self, collector: MetricsCollector) -> None:
        with patch(
            "stromboli.observability.collector.start_http_server",
            side_effect=OSError("Address already in use"),
        ):
            assert collector.start_http_server(port=9999) is False
        assert collector.server_running is False


# =============================================================================
# Cardinality and Lifecycle
# =============================================================================


class TestCardinalityProtection:
    """Test label cardinality limits."""

    def test_limit_blocks_new_combinations(
        self, collector: MetricsCollector, caplog: pytest.LogCaptureFixture
    ) -> None:
        with patch.object(MetricsCollector, "MAX_LABEL_COMBINATIONS", 2):
            for outcome in ("a", "b", "c"):
                collector.inc_counter(JOB_POLLS_TOTAL, labels={"outcome": outcome})
            collector.inc_counter(JOB_POLLS_TOTAL, labels={"outcome": "a"})

        assert collector.get_counter(JOB_POLLS_TOTAL, {"outcome": "a"}) == 2
        assert collector.get_counter(JOB_POLLS_TOTAL, {"outcome": "c"}) == 0
        assert "Cardinality limit" in caplog.text


class TestSingleton:
    """Test the global collector singleton."""

    def test_same_instance(self) -> None:
        assert get_metrics_collector() is get_metrics_collector()

    def test_reset_creates_new_instance(self) -> None:
        first = get_metrics_collector()
        first.inc_counter(JOB_POLLS_TOTAL, labels={"outcome": "pending"})

        reset_metrics_collector()
        second = get_metrics_collector()

        assert second is not first
        assert second.get_counter(JOB_POLLS_TOTAL, {"outcome": "pending"}) == 0

    def test_reset_clears_snapshot(self, collector: MetricsCollector) -> None:
        collector.inc_counter(JOB_POLLS_TOTAL, labels={"outcome": "pending"})
        collector.reset()
        assert collector.get_metrics()["counters"] == {}
