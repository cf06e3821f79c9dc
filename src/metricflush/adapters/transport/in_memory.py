"""In-memory transport adapter."""

import json
from dataclasses import dataclass, field
from typing import Any

from metricflush.core.models import SendOutcome


@dataclass(frozen=True)
class SentEnvelope:
    """A captured transport call."""

    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: str = ""

    def lines(self) -> list[str]:
        """Split the body into its newline-delimited segments."""
        return self.body.split("\n")

    def items(self) -> list[dict[str, Any]]:
        """Decode the item body and return its records."""
        items: list[dict[str, Any]] = json.loads(self.lines()[2])["items"]
        return items


class InMemoryTransport:
    """In-memory implementation of TransportPort.

    Captures every envelope in a list instead of sending it. Suitable for
    testing and for wiring a MetricsBuffer without network access.

    Args:
        outcome: Outcome returned from every send (default: success).
    """

    def __init__(self, outcome: SendOutcome | None = None) -> None:
        self.sent: list[SentEnvelope] = []
        self.outcome = outcome or SendOutcome(ok=True, status_code=200)

    async def send(self, url: str, headers: dict[str, str], body: str) -> SendOutcome:
        """Capture the envelope and return the configured outcome."""
        self.sent.append(SentEnvelope(url=url, headers=dict(headers), body=body))
        return self.outcome
