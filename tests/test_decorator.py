"""Tests for the @debounce, @throttle and @retry decorators."""

import asyncio

import pytest

from rate_limiter.config import BackoffConfig
from rate_limiter.decorator import debounce, retry, throttle
from rate_limiter.limiters.debounce import Debounce
from rate_limiter.limiters.throttle import Throttle


class TestDebounceDecorator:
    def test_without_parentheses(self):
        @debounce
        def handler(value):
            return value

        assert isinstance(handler.limiter, Debounce)  # type: ignore[attr-defined]
        assert handler.limiter.wait == 0.0  # type: ignore[attr-defined]

    def test_with_parentheses(self, clock):
        @debounce(wait=0.5, max_wait=2.0, clock=clock)
        def handler(value):
            return value

        assert handler.limiter.max_wait == 2.0  # type: ignore[attr-defined]
        assert handler.limiter.clock is clock  # type: ignore[attr-defined]

    def test_invalid_options_raise_at_decoration(self):
        with pytest.raises(ValueError, match="wait must be non-negative"):
            debounce(wait=-1)

    def test_debounces_calls(self, clock):
        seen = []

        @debounce(wait=0.032, clock=clock)
        def handler(value, *, suffix=""):
            seen.append(value + suffix)
            return value

        assert handler("a") is None
        assert handler("b", suffix="!") is None
        clock.advance(0.05)

        assert seen == ["b!"]
        assert handler("c") == "b"

    def test_wrapper_attributes(self, clock):
        @debounce(wait=1.0, clock=clock)
        def handler():
            return "done"

        handler()
        assert handler.limiter.is_pending is True  # type: ignore[attr-defined]
        assert handler.flush() == "done"  # type: ignore[attr-defined]

        handler()
        handler.cancel()  # type: ignore[attr-defined]
        assert handler.limiter.is_pending is False  # type: ignore[attr-defined]

    def test_preserves_function_name(self):
        @debounce(wait=1.0)
        def my_handler():
            """Docs."""

        assert my_handler.__name__ == "my_handler"
        assert my_handler.__doc__ == "Docs."

    async def test_coroutine_function_runs_as_task(self):
        seen = []

        @debounce(wait=0.02)
        async def handler(value):
            seen.append(value)
            return value.upper()

        handler("a")
        handler("b")
        await asyncio.sleep(0.06)
        assert seen == ["b"]

        task = handler("c")
        assert isinstance(task, asyncio.Future)
        assert await task == "B"
        assert await task == "B"
        await asyncio.sleep(0.06)


class TestThrottleDecorator:
    def test_without_parentheses(self):
        @throttle
        def handler():
            pass

        assert isinstance(handler.limiter, Throttle)  # type: ignore[attr-defined]

    def test_throttles_calls(self, clock):
        count = 0

        @throttle(wait=0.032, clock=clock)
        def handler():
            nonlocal count
            count += 1
            return count

        assert handler() == 1
        assert handler() == 1
        clock.advance(0.064)
        assert count == 2

    def test_leading_false(self, clock):
        @throttle(wait=0.032, leading=False, clock=clock)
        def handler(value):
            return value

        assert handler("a") is None
        assert handler.flush() == "a"  # type: ignore[attr-defined]


class TestRetryDecorator:
    def test_sync_function_raises(self):
        with pytest.raises(TypeError, match="only supports async function"):

            @retry
            def handler():
                pass

    async def test_without_parentheses(self):
        @retry
        async def handler(x):
            return x * 2

        assert await handler(21) == 42
        assert handler.config == BackoffConfig()  # type: ignore[attr-defined]

    async def test_retries_until_success(self):
        calls = 0

        @retry(max_delay=0, max_attempts=3)
        async def handler(value):
            nonlocal calls
            calls += 1
            if calls < 3:
                raise ConnectionError("again")
            return value

        assert await handler("ok") == "ok"
        assert calls == 3

    async def test_each_call_counts_attempts_separately(self):
        calls = 0

        @retry(max_delay=0, max_attempts=2)
        async def handler():
            nonlocal calls
            calls += 1
            raise ConnectionError("down")

        with pytest.raises(ConnectionError):
            await handler()
        with pytest.raises(ConnectionError):
            await handler()
        assert calls == 4

    async def test_retry_if(self):
        calls = 0

        @retry(max_delay=0, retry_if=lambda e, attempt: isinstance(e, ConnectionError))
        async def handler():
            nonlocal calls
            calls += 1
            raise KeyError("no")

        with pytest.raises(KeyError):
            await handler()
        assert calls == 1

    def test_preserves_function_name(self):
        @retry(max_attempts=2)
        async def fetch():
            pass

        assert fetch.__name__ == "fetch"
