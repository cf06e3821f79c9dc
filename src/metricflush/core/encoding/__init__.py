"""Wire encoders."""

from metricflush.core.encoding.envelope import encode_envelope, format_sent_at

__all__ = ["encode_envelope", "format_sent_at"]
