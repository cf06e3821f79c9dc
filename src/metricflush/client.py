"""Buffered metrics client.

MetricsBuffer accumulates encoded records in memory and ships them as one
envelope when either the buffer reaches its size limit or the flush interval
elapses after the first buffered record, whichever comes first. Delivery is
best effort: transport failures are logged and the batch is dropped.
"""

import asyncio
import logging
import sys
import threading
from collections.abc import Coroutine
from typing import Any

from metricflush.adapters.transport.http import HttpxTransport
from metricflush.config import MetricsConfig
from metricflush.core.dsn import envelope_url, parse_dsn, request_headers
from metricflush.core.encoding.envelope import encode_envelope
from metricflush.core.metrics import counter, distribution, encode_record, gauge
from metricflush.core.models import (
    AttributeValue,
    EncodedRecord,
    MetricEvent,
    MetricKind,
)
from metricflush.core.ports import TransportPort

logger = logging.getLogger(__name__)

_EAGER_TASKS = sys.version_info >= (3, 12)


class MetricsBuffer:
    """Records metrics and flushes them to an envelope endpoint in batches.

    Example:
        ```python
        from metricflush import create_metrics

        metrics = create_metrics("https://abc123@o1.ingest.example.io/42")
        metrics.count("checkout.completed", attributes={"route": "/checkout"})
        metrics.distribution("response.time", 125.5, unit="millisecond")
        await metrics.flush()
        ```
    """

    def __init__(
        self,
        dsn: str,
        transport: TransportPort | None = None,
        config: MetricsConfig | None = None,
    ) -> None:
        """Resolve the DSN and set up an empty buffer.

        Args:
            dsn: Address of the ingestion endpoint.
            transport: Adapter used to deliver envelopes. Defaults to
                HttpxTransport.
            config: Size and interval settings. Defaults to MetricsConfig().

        Raises:
            InvalidDsnError: If the DSN lacks a key, host or project id.
        """
        parsed = parse_dsn(dsn)
        self._dsn = dsn
        self._url = envelope_url(parsed)
        self._headers = request_headers(parsed)
        self._transport: TransportPort = (
            transport if transport is not None else HttpxTransport()
        )
        self._config = config or MetricsConfig()
        self._buffer: list[EncodedRecord] = []
        self._flush_handle: asyncio.TimerHandle | None = None
        self._flush_loop: asyncio.AbstractEventLoop | None = None
        # strong references so in-flight sends are not garbage collected
        self._send_tasks: set[asyncio.Task[None]] = set()
        self._send_threads: set[threading.Thread] = set()

    def count(
        self,
        name: str,
        value: float = 1,
        unit: str | None = None,
        attributes: dict[str, AttributeValue] | None = None,
    ) -> None:
        """Record a counter increment (default: 1)."""
        self._append(counter(name, value, unit=unit, attributes=attributes))

    def gauge(
        self,
        name: str,
        value: float,
        unit: str | None = None,
        attributes: dict[str, AttributeValue] | None = None,
    ) -> None:
        """Record the current value of a gauge."""
        self._append(gauge(name, value, unit=unit, attributes=attributes))

    def distribution(
        self,
        name: str,
        value: float,
        unit: str | None = None,
        attributes: dict[str, AttributeValue] | None = None,
    ) -> None:
        """Record one sample of a distribution."""
        self._append(distribution(name, value, unit=unit, attributes=attributes))

    def record(
        self,
        name: str,
        value: float,
        kind: MetricKind | str,
        unit: str | None = None,
        attributes: dict[str, AttributeValue] | None = None,
    ) -> None:
        """Record a metric of the given kind.

        Args:
            name: Metric name.
            value: Numeric value.
            kind: "counter", "gauge" or "distribution".
            unit: Optional unit.
            attributes: Optional attributes.
        """
        self._append(
            MetricEvent(
                name=name,
                value=value,
                kind=MetricKind(kind),
                unit=unit,
                attributes=attributes,
            )
        )

    async def flush(self) -> None:
        """Send everything buffered now and wait for the transport attempt.

        Always leaves an empty buffer and no pending deadline. Completes
        normally whether or not the endpoint accepted the batch.
        """
        batch = self._take_batch()
        if batch is None:
            return
        await self._send(self._encode(batch), len(batch))

    def _append(self, event: MetricEvent) -> None:
        self._buffer.append(encode_record(event))
        if len(self._buffer) >= self._config.buffer_size_limit:
            self._drain()
        else:
            self._schedule_flush()

    def _schedule_flush(self) -> None:
        """Arm the flush deadline unless one is already pending."""
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running event loop, deferring to size or manual flush")
            return

        if self._flush_handle is not None:
            if self._flush_loop is loop:
                return
            # left over from an event loop that is no longer running
            self._flush_handle.cancel()

        self._flush_loop = loop
        self._flush_handle = loop.call_later(
            self._config.flush_interval_seconds, self._on_flush_deadline
        )
        logger.debug(
            "Flush scheduled in %.3fs", self._config.flush_interval_seconds
        )

    def _cancel_flush(self) -> None:
        if self._flush_handle is not None:
            self._flush_handle.cancel()
        self._flush_handle = None
        self._flush_loop = None

    def _on_flush_deadline(self) -> None:
        self._flush_handle = None
        self._flush_loop = None
        self._drain()

    def _take_batch(self) -> list[EncodedRecord] | None:
        """Cancel the deadline and swap out the buffer.

        Returns:
            The buffered records in recording order, or None if empty.
        """
        self._cancel_flush()
        if not self._buffer:
            return None
        batch = self._buffer
        self._buffer = []
        return batch

    def _encode(self, batch: list[EncodedRecord]) -> str:
        return encode_envelope(batch, self._dsn)

    def _drain(self) -> None:
        """Take the batch now and send it without blocking the caller."""
        batch = self._take_batch()
        if batch is None:
            return
        body = self._encode(batch)
        send = self._send(body, len(batch))

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self._send_in_thread(send)
            return

        if _EAGER_TASKS:
            # runs up to the transport's first suspension before returning
            task = asyncio.Task(send, loop=loop, eager_start=True)
        else:
            task = loop.create_task(send)
        if not task.done():
            self._send_tasks.add(task)
            task.add_done_callback(self._send_tasks.discard)

    def _send_in_thread(self, send: Coroutine[Any, Any, None]) -> None:
        """Run a send on its own event loop in a daemon thread."""
        self._send_threads = {t for t in self._send_threads if t.is_alive()}
        thread = threading.Thread(
            target=asyncio.run, args=(send,), name="metricflush-send", daemon=True
        )
        self._send_threads.add(thread)
        thread.start()

    async def _send(self, body: str, count: int) -> None:
        """Hand an envelope to the transport, discarding any failure."""
        try:
            outcome = await self._transport.send(self._url, self._headers, body)
        except Exception:
            logger.warning(
                "Dropped batch of %d metrics: transport raised", count, exc_info=True
            )
            return

        if outcome.ok:
            logger.debug("Sent batch of %d metrics to %s", count, self._url)
        else:
            logger.warning(
                "Dropped batch of %d metrics: %s",
                count,
                outcome.error or f"status {outcome.status_code}",
            )


def create_metrics(
    dsn: str,
    transport: TransportPort | None = None,
    config: MetricsConfig | None = None,
) -> MetricsBuffer:
    """Create a MetricsBuffer for the given DSN.

    Args:
        dsn: Address of the ingestion endpoint.
        transport: Adapter used to deliver envelopes (default: HttpxTransport).
        config: Size and interval settings (default: MetricsConfig()).

    Returns:
        A ready-to-use MetricsBuffer.

    Raises:
        InvalidDsnError: If the DSN lacks a key, host or project id.
    """
    return MetricsBuffer(dsn, transport=transport, config=config)
