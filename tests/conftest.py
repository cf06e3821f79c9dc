"""Shared test fixtures for all test modules."""

from collections.abc import Callable

import pytest

from metricflush.adapters.transport.in_memory import InMemoryTransport
from metricflush.client import MetricsBuffer
from metricflush.config import MetricsConfig

VALID_DSN = "https://abc123@o123456.ingest.sentry.io/4567890"


@pytest.fixture
def dsn() -> str:
    """A DSN with key, host and project id."""
    return VALID_DSN


@pytest.fixture
def transport() -> InMemoryTransport:
    """Fixture providing an in-memory transport that accepts everything."""
    return InMemoryTransport()


@pytest.fixture
def make_metrics(
    dsn: str, transport: InMemoryTransport
) -> Callable[..., MetricsBuffer]:
    """Factory fixture for MetricsBuffer instances wired to the transport.

    Usage:
        def test_something(make_metrics, transport):
            metrics = make_metrics(flush_interval_seconds=0.05)
            metrics.count("requests")
    """

    def _make(**config: float) -> MetricsBuffer:
        return MetricsBuffer(dsn, transport=transport, config=MetricsConfig(**config))

    return _make


@pytest.fixture
def metrics(make_metrics: Callable[..., MetricsBuffer]) -> MetricsBuffer:
    """MetricsBuffer with default settings and an in-memory transport."""
    return make_metrics()
