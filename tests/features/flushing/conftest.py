"""BDD step definitions for flush trigger scenarios.

Each When step runs its own coroutine to completion with asyncio.run, so
background sends and timers are settled before the Then steps inspect the
transport.
"""

import asyncio
from dataclasses import dataclass, field

import pytest
from pytest_bdd import given, parsers, then, when

from metricflush.adapters.transport.in_memory import InMemoryTransport
from metricflush.client import MetricsBuffer
from metricflush.config import MetricsConfig
from metricflush.core.models import SendOutcome

DSN = "https://abc123@o123456.ingest.sentry.io/4567890"


@dataclass
class FlushScenarioContext:
    """Mutable state shared between the steps of one scenario."""

    transport: InMemoryTransport = field(default_factory=InMemoryTransport)
    metrics: MetricsBuffer | None = None
    exception_raised: Exception | None = None

    @property
    def buffer(self) -> MetricsBuffer:
        assert self.metrics is not None, "metrics buffer not configured"
        return self.metrics


@pytest.fixture
def ctx() -> FlushScenarioContext:
    """Fresh scenario context for each test."""
    return FlushScenarioContext()


async def _settle() -> None:
    for _ in range(3):
        await asyncio.sleep(0)


# === Background Steps ===
@given("an in-memory transport")
def step_transport(ctx: FlushScenarioContext) -> None:
    ctx.transport = InMemoryTransport()


@given(
    parsers.parse(
        "a metrics buffer with a limit of {limit:d} records and a {interval:d}ms interval"
    )
)
def step_metrics_buffer(ctx: FlushScenarioContext, limit: int, interval: int) -> None:
    ctx.metrics = MetricsBuffer(
        DSN,
        transport=ctx.transport,
        config=MetricsConfig(
            buffer_size_limit=limit, flush_interval_seconds=interval / 1000
        ),
    )


@given("the endpoint rejects envelopes")
def step_endpoint_rejects(ctx: FlushScenarioContext) -> None:
    ctx.transport.outcome = SendOutcome(ok=False, status_code=400, error="HTTP 400")


# === Recording Steps ===
@when(parsers.parse("{n:d} counters are recorded"))
def step_record_counters(ctx: FlushScenarioContext, n: int) -> None:
    async def record() -> None:
        for i in range(n):
            ctx.buffer.count(f"metric.{i}")
        await _settle()

    try:
        asyncio.run(record())
    except Exception as e:
        ctx.exception_raised = e


@when(parsers.parse("{n:d} gauges are recorded and {wait:d}ms pass"))
def step_record_gauges_and_wait(ctx: FlushScenarioContext, n: int, wait: int) -> None:
    async def record_and_wait() -> None:
        for i in range(n):
            ctx.buffer.gauge(f"gauge.{i}", i)
        await asyncio.sleep(wait / 1000)
        await _settle()

    asyncio.run(record_and_wait())


@when("the buffer is flushed")
def step_flush(ctx: FlushScenarioContext) -> None:
    try:
        asyncio.run(ctx.buffer.flush())
    except Exception as e:
        ctx.exception_raised = e


# === Assertion Steps ===
@then("no envelope has been sent")
def step_none_sent(ctx: FlushScenarioContext) -> None:
    assert ctx.transport.sent == []


@then(parsers.re(r"(?P<n>\d+) envelopes? (has|have) been sent"), converters={"n": int})
def step_n_sent(ctx: FlushScenarioContext, n: int) -> None:
    assert len(ctx.transport.sent) == n


@then(parsers.parse("envelope {index:d} carries {n:d} records"))
def step_envelope_size(ctx: FlushScenarioContext, index: int, n: int) -> None:
    assert len(ctx.transport.sent[index - 1].items()) == n


@then(parsers.parse("every envelope has {n:d} newline-separated segments"))
def step_segments(ctx: FlushScenarioContext, n: int) -> None:
    assert all(len(sent.lines()) == n for sent in ctx.transport.sent)


@then("no error reached the caller")
def step_no_error(ctx: FlushScenarioContext) -> None:
    assert ctx.exception_raised is None
