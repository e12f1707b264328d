"""Shared fixtures for rate limiter tests."""

import pytest

from rate_limiter.clock import ManualClock


class Recorder:
    """Callable that records its calls and echoes its first argument."""

    def __init__(self) -> None:
        self.calls: list[tuple[tuple, dict]] = []

    def __call__(self, *args, **kwargs):
        self.calls.append((args, kwargs))
        return args[0] if args else None

    @property
    def count(self) -> int:
        return len(self.calls)

    @property
    def last_args(self) -> tuple:
        return self.calls[-1][0]


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def recorder():
    return Recorder()
