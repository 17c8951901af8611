import asyncio

import pytest

from profilekit.errors import ErrorKind, WidgetError


class FakeProducer:
    """Async produce() stand-in that records configs and fails the first N calls."""

    def __init__(self, fail_times=0, delay=0.0):
        self.calls = []
        self.fail_times = fail_times
        self.delay = delay

    async def __call__(self, config):
        self.calls.append(config)
        if self.delay:
            await asyncio.sleep(self.delay)
        if len(self.calls) <= self.fail_times:
            raise WidgetError(ErrorKind.NETWORK, f"boom #{len(self.calls)}")
        return f"artifact-{len(self.calls)}"


@pytest.fixture
def producer():
    return FakeProducer()


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()
