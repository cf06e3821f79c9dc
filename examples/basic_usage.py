"""Record a few metrics and ship them to an envelope endpoint.

Run with a real DSN:
    METRICFLUSH_DSN=https://<key>@<host>/<project> python examples/basic_usage.py

Without METRICFLUSH_DSN the envelope is captured in memory and printed.
"""

import asyncio
import logging
import os
import random

from metricflush import InMemoryTransport, MetricsConfig, create_metrics

logging.basicConfig(level=logging.DEBUG)

DEMO_DSN = "https://publickey@ingest.example.io/1"


async def main() -> None:
    dsn = os.environ.get("METRICFLUSH_DSN")
    transport = None if dsn else InMemoryTransport()
    metrics = create_metrics(
        dsn or DEMO_DSN,
        transport=transport,
        config=MetricsConfig(flush_interval_seconds=1.0),
    )

    for _ in range(10):
        metrics.count("checkout.completed", attributes={"route": "/checkout"})
        metrics.distribution(
            "response.time", random.uniform(20, 250), unit="millisecond"
        )
    metrics.gauge("queue.depth", 42, unit="items", attributes={"shard": 3})

    # let the interval trigger fire
    await asyncio.sleep(1.5)
    await metrics.flush()

    if isinstance(transport, InMemoryTransport):
        for sent in transport.sent:
            print(sent.body)


if __name__ == "__main__":
    asyncio.run(main())
