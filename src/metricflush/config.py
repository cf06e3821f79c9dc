"""Configuration for the metrics buffer."""

from dataclasses import dataclass

BUFFER_SIZE_LIMIT = 100
FLUSH_INTERVAL_SECONDS = 5.0

ENVELOPE_CONTENT_TYPE = "application/x-sentry-envelope"
ITEM_TYPE = "trace_metric"
ITEM_CONTENT_TYPE = "application/vnd.sentry.items.trace-metric+json"
SENTRY_VERSION = 7


@dataclass(frozen=True)
class MetricsConfig:
    """Tuning knobs for MetricsBuffer.

    Attributes:
        buffer_size_limit: Number of buffered records that forces a drain.
        flush_interval_seconds: Delay between the first buffered record and
            the time-triggered drain.
    """

    buffer_size_limit: int = BUFFER_SIZE_LIMIT
    flush_interval_seconds: float = FLUSH_INTERVAL_SECONDS

    def __post_init__(self) -> None:
        if self.buffer_size_limit < 1:
            raise ValueError(
                f"buffer_size_limit must be positive, got {self.buffer_size_limit}"
            )
        if not self.flush_interval_seconds > 0:
            raise ValueError(
                "flush_interval_seconds must be positive, "
                f"got {self.flush_interval_seconds}"
            )
