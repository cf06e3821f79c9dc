"""Transport adapters implementing TransportPort."""

from metricflush.adapters.transport.http import HttpxTransport
from metricflush.adapters.transport.in_memory import InMemoryTransport, SentEnvelope

__all__ = [
    "HttpxTransport",
    "InMemoryTransport",
    "SentEnvelope",
]
