"""HTTP transport adapter built on httpx."""

import logging

import httpx

from metricflush.core.models import SendOutcome

logger = logging.getLogger(__name__)


class HttpxTransport:
    """httpx implementation of TransportPort.

    A fresh AsyncClient is opened for every send, so the adapter is not tied
    to the event loop it was created on.

    Args:
        timeout: Request timeout in seconds. None (the default) waits
            indefinitely.
        transport: Optional httpx transport, e.g. httpx.MockTransport in tests.
    """

    def __init__(
        self,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._timeout = timeout
        self._transport = transport

    async def send(self, url: str, headers: dict[str, str], body: str) -> SendOutcome:
        """POST the envelope and translate the result into a SendOutcome."""
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.post(url, headers=headers, content=body)
        except httpx.HTTPError as e:
            logger.debug("Envelope POST to %s failed: %s", url, e)
            return SendOutcome(ok=False, error=f"{type(e).__name__}: {e!s}")

        if response.is_success:
            return SendOutcome(ok=True, status_code=response.status_code)
        return SendOutcome(
            ok=False,
            status_code=response.status_code,
            error=f"HTTP {response.status_code}",
        )
