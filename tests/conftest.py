"""
Shared fixtures for the animation engine tests
"""

import pytest


class FakeClock:
    """Manually advanced time source (seconds)"""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def timer():
    """Cost timer that never advances (keeps recorded update times at zero)"""
    return FakeClock()
