"""Tests for the debounce wrapper."""

import asyncio

import pytest

from pacer.debounce import Debounced, debounce


class Recorder:
    def __init__(self):
        self.calls = []

    def __call__(self, *args, **kwargs):
        self.calls.append((args, kwargs))


class TestDebouncedCall:
    async def test_single_call_runs_after_delay(self):
        rec = Recorder()
        d = debounce(rec, 50)
        d("hello")
        assert rec.calls == []
        await asyncio.sleep(0.1)
        assert rec.calls == [(("hello",), {})]

    async def test_returns_none_immediately(self):
        d = debounce(Recorder(), 50)
        assert d(1) is None
        assert d.pending is True

    async def test_burst_runs_once_with_last_arguments(self):
        rec = Recorder()
        d = debounce(rec, 50)
        d("a")
        d("b")
        d("c", flag=True)
        await asyncio.sleep(0.12)
        assert rec.calls == [(("c",), {"flag": True})]

    async def test_timer_resets_on_call(self):
        rec = Recorder()
        d = debounce(rec, 100)
        d("first")
        await asyncio.sleep(0.06)
        d("second")
        await asyncio.sleep(0.06)
        # 120ms after the first call, but only 60ms after the second
        assert rec.calls == []
        await asyncio.sleep(0.08)
        assert rec.calls == [(("second",), {})]

    async def test_runs_delay_after_last_call(self):
        loop = asyncio.get_running_loop()
        fired = loop.create_future()
        d = debounce(lambda: fired.set_result(loop.time()), 80)
        d()
        await asyncio.sleep(0.04)
        last_call = loop.time()
        d()
        fired_at = await asyncio.wait_for(fired, timeout=1.0)
        assert fired_at - last_call >= 0.079

    async def test_separate_bursts_each_run(self):
        rec = Recorder()
        d = debounce(rec, 30)
        d("burst1")
        await asyncio.sleep(0.08)
        d("burst2")
        await asyncio.sleep(0.08)
        assert [c[0] for c in rec.calls] == [("burst1",), ("burst2",)]
        assert d.pending is False

    async def test_zero_delay_still_deferred(self):
        rec = Recorder()
        d = debounce(rec, 0)
        d("x")
        assert rec.calls == []
        await asyncio.sleep(0.01)
        assert rec.calls == [(("x",), {})]

    def test_requires_running_loop(self):
        d = debounce(Recorder(), 10)
        with pytest.raises(RuntimeError):
            d("x")


class TestDebouncedAsync:
    async def test_coroutine_function_runs_as_task(self):
        seen = []

        async def handler(value):
            await asyncio.sleep(0)
            seen.append(value)

        d = debounce(handler, 20)
        d(1)
        d(2)
        await asyncio.sleep(0.08)
        assert seen == [2]


class TestDebouncedCancelAndFlush:
    async def test_cancel_drops_pending(self):
        rec = Recorder()
        d = debounce(rec, 30)
        d("x")
        assert d.cancel() is True
        assert d.pending is False
        await asyncio.sleep(0.06)
        assert rec.calls == []

    async def test_cancel_without_pending(self):
        assert debounce(Recorder(), 30).cancel() is False

    async def test_flush_runs_now(self):
        rec = Recorder()
        d = debounce(rec, 10_000)
        d("now")
        assert d.flush() is True
        assert rec.calls == [(("now",), {})]
        assert d.pending is False

    async def test_flush_without_pending(self):
        rec = Recorder()
        assert debounce(rec, 30).flush() is False
        assert rec.calls == []

    async def test_flush_does_not_run_twice(self):
        rec = Recorder()
        d = debounce(rec, 30)
        d("once")
        d.flush()
        await asyncio.sleep(0.06)
        assert len(rec.calls) == 1

    async def test_flush_propagates_errors(self):
        def boom():
            raise ValueError("boom")

        d = debounce(boom, 10_000)
        d()
        with pytest.raises(ValueError, match="boom"):
            d.flush()
        assert d.pending is False

    async def test_reset_cancels(self):
        rec = Recorder()
        d = debounce(rec, 30)
        d("x")
        d.reset()
        await asyncio.sleep(0.06)
        assert rec.calls == []


class TestDebounceFactory:
    def test_default_delay(self):
        assert debounce(Recorder()).delay_ms == 300

    def test_positional_delay(self):
        d = debounce(Recorder(), 120)
        assert isinstance(d, Debounced)
        assert d.delay_ms == 120

    def test_negative_delay_raises(self):
        with pytest.raises(ValueError, match="delay_ms must be non-negative"):
            debounce(Recorder(), -1)

    def test_non_finite_delay_raises(self):
        with pytest.raises(ValueError, match="delay_ms must be finite"):
            debounce(Recorder(), float("nan"))

    def test_decorator_without_parentheses(self):
        @debounce
        def autosave(text):
            pass

        assert isinstance(autosave, Debounced)
        assert autosave.delay_ms == 300
        assert autosave.__name__ == "autosave"

    def test_decorator_with_delay(self):
        @debounce(delay_ms=50)
        def autosave(text):
            pass

        assert autosave.delay_ms == 50

    async def test_wrappers_are_independent(self):
        rec = Recorder()
        first = debounce(rec, 30)
        second = debounce(rec, 30)
        first("a")
        second("b")
        await asyncio.sleep(0.08)
        assert sorted(c[0] for c in rec.calls) == [("a",), ("b",)]

    def test_repr(self):
        def autosave():
            pass

        assert "Debounced(fn=" in repr(debounce(autosave, 50))
        assert "delay_ms=50" in repr(debounce(autosave, 50))
