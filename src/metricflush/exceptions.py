"""Exception types raised by metricflush.

Only construction-time problems surface as exceptions. Delivery failures
are reported through SendOutcome and discarded by the buffer.
"""


class MetricflushError(Exception):
    """Base class for all metricflush errors."""


class InvalidDsnError(MetricflushError, ValueError):
    """Raised when a DSN cannot be turned into an ingestion target."""
