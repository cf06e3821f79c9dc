"""Core domain models for buffered metrics."""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any

AttributeValue = str | int | float | bool


def wire_number(value: Any) -> Any:
    """Normalize a number for JSON output.

    Whole floats become ints (1705312800.0 -> 1705312800) and non-finite
    floats become None, so the encoded body is strict JSON. Other values,
    including bools, pass through unchanged.
    """
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        if value.is_integer():
            return int(value)
    return value


class MetricKind(str, Enum):
    """Kind of metric carried by an event."""

    COUNTER = "counter"
    GAUGE = "gauge"
    DISTRIBUTION = "distribution"


@dataclass(frozen=True)
class MetricEvent:
    """A metric observation as recorded by application code.

    Attributes:
        name: Metric name (e.g., checkout.completed).
        value: The numeric value.
        kind: Counter, gauge or distribution.
        unit: Optional free-text unit (e.g., millisecond).
        attributes: Optional key-value pairs describing the observation.
    """

    name: str
    value: float
    kind: MetricKind
    unit: str | None = None
    attributes: dict[str, AttributeValue] | None = None


@dataclass(frozen=True)
class FormattedAttribute:
    """An attribute value tagged with its wire type.

    Attributes:
        value: The attribute value.
        type: One of string, integer, double or boolean.
    """

    value: AttributeValue
    type: str

    def to_dict(self) -> dict[str, Any]:
        return {"value": wire_number(self.value), "type": self.type}


@dataclass(frozen=True)
class EncodedRecord:
    """A MetricEvent stamped with capture time and a trace id.

    Attributes:
        timestamp: Unix timestamp in seconds, fractional.
        trace_id: 32 lowercase hex characters, unique per record.
        name: Metric name.
        value: The numeric value.
        kind: Counter, gauge or distribution.
        unit: Unit, omitted from the wire form when None.
        attributes: Typed attributes, omitted from the wire form when None.
    """

    timestamp: float
    trace_id: str
    name: str
    value: float
    kind: MetricKind
    unit: str | None = None
    attributes: dict[str, FormattedAttribute] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Render the record as the item object sent to the endpoint."""
        obj: dict[str, Any] = {
            "timestamp": wire_number(self.timestamp),
            "trace_id": self.trace_id,
            "name": self.name,
            "value": wire_number(self.value),
            "type": self.kind.value,
        }
        if self.unit is not None:
            obj["unit"] = self.unit
        if self.attributes is not None:
            obj["attributes"] = {
                key: attr.to_dict() for key, attr in self.attributes.items()
            }
        return obj


@dataclass(frozen=True)
class ParsedDsn:
    """Components of a DSN needed to reach the ingestion endpoint."""

    public_key: str
    host: str
    project_id: str


@dataclass(frozen=True)
class SendOutcome:
    """Result of a single transport attempt.

    Attributes:
        ok: True if the endpoint accepted the envelope.
        status_code: HTTP status, if a response was received.
        error: Description of the failure, if any.
    """

    ok: bool
    status_code: int | None = None
    error: str | None = None
