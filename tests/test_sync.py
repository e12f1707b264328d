"""Tests for the background loop thread."""

import asyncio

import pytest

from rate_limiter._sync import _LoopThread, get_shared_loop


class TestLoopThread:
    def test_start_and_run_coroutine(self):
        lt = _LoopThread()
        lt.start()
        try:

            async def coro():
                return 42

            assert lt.run_coroutine(coro()) == 42
            assert lt.running is True
        finally:
            lt.shutdown()
        assert lt.running is False

    def test_start_is_idempotent(self):
        lt = _LoopThread()
        lt.start()
        lt.start()
        lt.shutdown()

    def test_run_coroutine_auto_starts(self):
        lt = _LoopThread()
        try:

            async def coro():
                await asyncio.sleep(0.01)
                return "auto"

            assert lt.run_coroutine(coro()) == "auto"
        finally:
            lt.shutdown()

    def test_exception_reraised_in_caller(self):
        lt = _LoopThread()
        try:

            async def coro():
                raise LookupError("missing")

            with pytest.raises(LookupError, match="missing"):
                lt.run_coroutine(coro())
        finally:
            lt.shutdown()

    def test_shutdown_without_start(self):
        _LoopThread().shutdown()

    def test_restart_after_shutdown(self):
        lt = _LoopThread()
        lt.start()
        lt.shutdown()

        async def coro():
            return "again"

        try:
            assert lt.run_coroutine(coro()) == "again"
        finally:
            lt.shutdown()


class TestGetSharedLoop:
    def test_returns_loop_thread(self):
        assert isinstance(get_shared_loop(), _LoopThread)

    def test_is_shared(self):
        assert get_shared_loop() is get_shared_loop()

    async def test_usable_from_inside_running_loop(self):
        async def coro():
            return "shared"

        assert get_shared_loop().run_coroutine(coro()) == "shared"
