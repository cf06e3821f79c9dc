"""Port interface for envelope transports.

MetricsBuffer depends only on this protocol, not on a concrete HTTP client.
"""

from typing import Protocol, runtime_checkable

from metricflush.core.models import SendOutcome


@runtime_checkable
class TransportPort(Protocol):
    """Port for delivering an encoded envelope.

    Adapters report failures through the returned SendOutcome instead of
    raising. Examples: HttpxTransport, InMemoryTransport.
    """

    async def send(self, url: str, headers: dict[str, str], body: str) -> SendOutcome:
        """POST an envelope body to url.

        Args:
            url: Envelope ingestion URL.
            headers: Request headers, including content type and auth.
            body: The encoded envelope.

        Returns:
            SendOutcome describing whether the endpoint accepted the batch.
        """
        ...
