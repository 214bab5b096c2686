"""Shared fixtures for the Stromboli client test suite."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from stromboli.config import ClientConfig
from stromboli.observability.collector import (
    MetricsCollector,
    reset_metrics_collector,
)
from tests.factories import BASE_URL


@pytest.fixture(autouse=True)
def _reset_global_metrics() -> Iterator[None]:
    """Give every test a fresh global metrics collector."""
    reset_metrics_collector()
    yield
    reset_metrics_collector()


@pytest.fixture
def collector() -> MetricsCollector:
    """A private collector with its own Prometheus registry."""
    return MetricsCollector()


@pytest.fixture
def config() -> ClientConfig:
    """Default configuration pointed at the test base URL."""
    return ClientConfig(base_url=BASE_URL, metrics_enabled=False)
