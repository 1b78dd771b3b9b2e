"""
Pytest configuration and shared fixtures.
"""

import asyncio
import time
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio

from scheduler import TimerRegistry, create_scheduler, shutdown_scheduler


class FakeClock:
    """Monotonic clock the tests can move forward by hand."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


async def _wait_until(condition, timeout: float = 3.0, interval: float = 0.02) -> bool:
    """Poll condition() until it is true or the timeout passes."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if condition():
            return True
        await asyncio.sleep(interval)
    return condition()


@pytest.fixture
def fake_clock():
    """Controllable monotonic clock."""
    return FakeClock()


@pytest.fixture
def mock_scheduler():
    """Scheduler stub whose add_job returns a fresh job mock per call."""
    scheduler = MagicMock()
    scheduler.add_job.side_effect = lambda *args, **kwargs: MagicMock()
    return scheduler


@pytest_asyncio.fixture
async def scheduler():
    """Real in-memory AsyncIOScheduler running on the test loop."""
    sched = create_scheduler()
    sched.start()
    yield sched
    shutdown_scheduler(sched)


@pytest_asyncio.fixture
async def registry(scheduler):
    """Registry backed by a running scheduler."""
    return TimerRegistry(scheduler)


@pytest.fixture
def mock_gateway():
    """Gateway whose sends always succeed."""
    gateway = MagicMock()
    gateway.send = AsyncMock(return_value=True)
    gateway.send_alarm = AsyncMock(return_value=True)
    return gateway


@pytest.fixture
def make_message():
    """Factory for incoming Telegram messages."""

    def _make(text, chat_id: int = 123456789, username: str = "tester"):
        message = MagicMock()
        message.text = text
        message.chat.id = chat_id
        message.from_user.id = chat_id
        message.from_user.username = username
        message.answer = AsyncMock()
        return message

    return _make


@pytest.fixture
def wait_until():
    """Async poller: await wait_until(lambda: ...)."""
    return _wait_until
