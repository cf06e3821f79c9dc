"""Metric helper functions for creating and encoding MetricEvent objects."""

import secrets
import time
from collections.abc import Mapping

from metricflush.core.models import (
    AttributeValue,
    EncodedRecord,
    FormattedAttribute,
    MetricEvent,
    MetricKind,
)


def counter(
    name: str,
    value: float = 1,
    unit: str | None = None,
    attributes: dict[str, AttributeValue] | None = None,
) -> MetricEvent:
    """Create a counter event.

    Args:
        name: Metric name (e.g., "checkout.completed")
        value: Increment value (default: 1)
        unit: Optional unit
        attributes: Optional attributes

    Returns:
        MetricEvent of kind counter
    """
    return MetricEvent(
        name=name,
        value=value,
        kind=MetricKind.COUNTER,
        unit=unit,
        attributes=attributes,
    )


def gauge(
    name: str,
    value: float,
    unit: str | None = None,
    attributes: dict[str, AttributeValue] | None = None,
) -> MetricEvent:
    """Create a gauge event.

    Args:
        name: Metric name (e.g., "queue.depth")
        value: Current gauge value
        unit: Optional unit
        attributes: Optional attributes

    Returns:
        MetricEvent of kind gauge
    """
    return MetricEvent(
        name=name,
        value=value,
        kind=MetricKind.GAUGE,
        unit=unit,
        attributes=attributes,
    )


def distribution(
    name: str,
    value: float,
    unit: str | None = None,
    attributes: dict[str, AttributeValue] | None = None,
) -> MetricEvent:
    """Create a distribution event for a single observation."""
    return MetricEvent(
        name=name,
        value=value,
        kind=MetricKind.DISTRIBUTION,
        unit=unit,
        attributes=attributes,
    )


def generate_trace_id() -> str:
    """Return 16 random bytes as 32 lowercase hex characters."""
    return secrets.token_bytes(16).hex()


def format_attribute_value(value: object) -> FormattedAttribute:
    """Tag an attribute value with its wire type.

    Integral floats are reported as integer. Values of any other type are
    stringified.
    """
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return FormattedAttribute(value=value, type="boolean")
    if isinstance(value, str):
        return FormattedAttribute(value=value, type="string")
    if isinstance(value, int):
        return FormattedAttribute(value=value, type="integer")
    if isinstance(value, float):
        if value.is_integer():
            return FormattedAttribute(value=value, type="integer")
        return FormattedAttribute(value=value, type="double")
    return FormattedAttribute(value=str(value), type="string")


def format_attributes(
    attributes: Mapping[str, object] | None,
) -> dict[str, FormattedAttribute] | None:
    """Format every attribute value, or return None if there are none."""
    if attributes is None:
        return None
    return {key: format_attribute_value(value) for key, value in attributes.items()}


def encode_record(event: MetricEvent) -> EncodedRecord:
    """Stamp an event with the current time and a fresh trace id.

    Args:
        event: The recorded MetricEvent

    Returns:
        EncodedRecord ready to be buffered
    """
    return EncodedRecord(
        timestamp=time.time(),
        trace_id=generate_trace_id(),
        name=event.name,
        value=event.value,
        kind=event.kind,
        unit=event.unit or None,
        attributes=format_attributes(event.attributes),
    )
