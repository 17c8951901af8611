import asyncio

import pytest

from profilekit.errors import ErrorKind, WidgetError
from profilekit.generator import DebouncedGenerator

from conftest import FakeProducer


@pytest.mark.asyncio
async def test_schedule_coalesces_to_last_config():
    produce = FakeProducer()
    gen = DebouncedGenerator(produce, quiet_period=0.02)
    tasks = [gen.schedule(i) for i in range(5)]
    result = await tasks[-1]
    await asyncio.sleep(0.05)
    assert produce.calls == [4]
    assert result == "artifact-1"
    assert all(t.cancelled() for t in tasks[:-1])


@pytest.mark.asyncio
async def test_retry_then_success_resets_counter():
    produce = FakeProducer(fail_times=2)
    gen = DebouncedGenerator(produce, quiet_period=0, max_retries=2, backoff_base=0.001)
    result = await gen.schedule("cfg")
    assert result == "artifact-3"
    assert len(produce.calls) == 3
    assert gen.attempt == 0


@pytest.mark.asyncio
async def test_exhausted_retries_raise_and_reset_counter():
    produce = FakeProducer(fail_times=10)
    gen = DebouncedGenerator(produce, quiet_period=0, max_retries=2, backoff_base=0.001)
    with pytest.raises(WidgetError) as exc_info:
        await gen.schedule("cfg")
    assert exc_info.value.kind is ErrorKind.NETWORK
    assert len(produce.calls) == 3
    assert gen.attempt == 0

    # next logical request starts from a clean counter
    produce.fail_times = 0
    produce.calls.clear()
    assert await gen.schedule("cfg") == "artifact-1"


@pytest.mark.asyncio
async def test_validation_errors_are_not_retried():
    calls = []

    async def produce(config):
        calls.append(config)
        raise WidgetError(ErrorKind.VALIDATION, "missing")

    gen = DebouncedGenerator(produce, quiet_period=0, max_retries=2, backoff_base=0.001)
    with pytest.raises(WidgetError):
        await gen.schedule("cfg")
    assert calls == ["cfg"]


def test_backoff_delay_doubles():
    gen = DebouncedGenerator(FakeProducer(), backoff_base=1.0)
    assert gen.backoff_delay(1) == 2.0
    assert gen.backoff_delay(2) == 4.0


@pytest.mark.asyncio
async def test_refresh_skips_quiet_period():
    produce = FakeProducer()
    gen = DebouncedGenerator(produce, quiet_period=10)
    result = await asyncio.wait_for(gen.refresh("now"), timeout=1)
    assert result == "artifact-1"


@pytest.mark.asyncio
async def test_cancel_prevents_pending_call():
    produce = FakeProducer()
    gen = DebouncedGenerator(produce, quiet_period=0.02)
    task = gen.schedule("cfg")
    assert gen.pending
    gen.cancel()
    await asyncio.sleep(0.05)
    assert task.cancelled()
    assert produce.calls == []
    assert not gen.pending


@pytest.mark.asyncio
async def test_cancel_during_backoff_stops_retries():
    produce = FakeProducer(fail_times=10)
    gen = DebouncedGenerator(produce, quiet_period=0, max_retries=2, backoff_base=0.05)
    task = gen.schedule("cfg")
    await asyncio.sleep(0.01)
    assert len(produce.calls) == 1
    gen.cancel()
    await asyncio.sleep(0.3)
    assert task.cancelled()
    assert len(produce.calls) == 1
