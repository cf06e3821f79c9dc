"""Buffered client-side metrics shipped to an envelope endpoint."""

import logging

from metricflush.adapters.transport import HttpxTransport, InMemoryTransport
from metricflush.client import MetricsBuffer, create_metrics
from metricflush.config import MetricsConfig
from metricflush.core.models import (
    EncodedRecord,
    FormattedAttribute,
    MetricEvent,
    MetricKind,
    SendOutcome,
)
from metricflush.core.ports import TransportPort
from metricflush.exceptions import InvalidDsnError, MetricflushError

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "EncodedRecord",
    "FormattedAttribute",
    "HttpxTransport",
    "InMemoryTransport",
    "InvalidDsnError",
    "MetricEvent",
    "MetricKind",
    "MetricflushError",
    "MetricsBuffer",
    "MetricsConfig",
    "SendOutcome",
    "TransportPort",
    "create_metrics",
]
