"""
Pytest configuration shared by nonce_service and sso_client tests: a manually advanced clock.
"""
import pytest


class FakeClock:
    """Manually advanced clock (epoch ms)."""

    def __init__(self, now: int = 1_700_000_000_000):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


@pytest.fixture
def clock():
    return FakeClock()
