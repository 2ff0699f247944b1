"""Shared fixtures for pacer tests."""

import sys

import pytest

import pacer.retry  # noqa: F401  (ensures the submodule is loaded)


class FakeClock:
    """Monotonic clock the test advances by hand, in seconds."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class Flaky:
    """Async callable that raises the queued errors before returning *value*."""

    def __init__(self, *errors: Exception, value: object = "ok") -> None:
        self.errors = list(errors)
        self.value = value
        self.calls = 0

    async def __call__(self) -> object:
        self.calls += 1
        if self.errors:
            raise self.errors.pop(0)
        return self.value


@pytest.fixture
def flaky():
    return Flaky


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def recorded_waits(monkeypatch):
    """Replace the retry delay with a no-op that records the requested ms."""
    waits: list[float] = []

    async def fake_wait(ms: float) -> None:
        waits.append(ms)

    monkeypatch.setattr(sys.modules["pacer.retry"], "wait", fake_wait)
    return waits
