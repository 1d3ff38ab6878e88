import numpy as np
import pytest

from mandi.config import default_config
from mandi.scheduling import PollingScheduler


class FakeClock:
    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class StubRng:
    """Stands in for numpy.random.Generator with fixed draws."""

    def __init__(self, fluctuation=0.0, draw=0.0, shift=0):
        self.fluctuation = fluctuation
        self.draw = draw
        self.shift = shift
        self.integer_calls = []

    def uniform(self, low, high):
        return self.fluctuation

    def random(self):
        return self.draw

    def integers(self, low, high):
        self.integer_calls.append((low, high))
        return self.shift


@pytest.fixture
def cfg():
    return default_config()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def scheduler(clock):
    return PollingScheduler(clock=clock)


@pytest.fixture
def rng():
    return np.random.default_rng(1234)
