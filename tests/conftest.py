import pytest

from lispcore.types.environment import Environment
from lispcore.sessions.manager import SessionManager


class FakeClock:
    """Manually advanced monotonic clock for idle-eviction tests."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def env():
    """Fresh, empty global environment."""
    return Environment()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def manager(clock):
    m = SessionManager(idle_timeout=60.0, clock=clock)
    yield m
    m.close()
