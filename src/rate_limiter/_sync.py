"""Blocking entry points for coroutine-based retries.

Runs coroutines on a background event loop thread so that
:meth:`~rate_limiter.backoff.BackOff.run_sync` works from plain
synchronous code, including code that is itself called from inside a
running event loop.
"""

import asyncio
import threading
from collections.abc import Coroutine
from typing import Any, TypeVar

T = TypeVar("T")


class _LoopThread:
    """A daemon thread that owns an event loop and runs submitted coroutines."""

    __slots__ = ("_loop", "_lock", "_ready", "_thread")

    def __init__(self) -> None:
        self._loop: asyncio.AbstractEventLoop | None = None
        self._thread: threading.Thread | None = None
        self._ready = threading.Event()
        self._lock = threading.Lock()

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start the loop thread. Does nothing if it is already running."""
        with self._lock:
            if self._thread is not None:
                return
            self._thread = threading.Thread(
                target=self._serve,
                name="rate-limiter-loop",
                daemon=True,
            )
            self._thread.start()
        self._ready.wait()

    def _serve(self) -> None:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        self._loop = loop
        self._ready.set()
        try:
            loop.run_forever()
        finally:
            loop.close()

    def run_coroutine(self, coro: Coroutine[Any, Any, T]) -> T:
        """Run *coro* on the loop thread and block until it finishes.

        Exceptions raised by the coroutine are re-raised in the caller.
        """
        self.start()
        assert self._loop is not None
        return asyncio.run_coroutine_threadsafe(coro, self._loop).result()

    def shutdown(self, timeout: float = 5.0) -> None:
        """Stop the loop and join the thread."""
        with self._lock:
            if self._loop is not None:
                self._loop.call_soon_threadsafe(self._loop.stop)
            if self._thread is not None:
                self._thread.join(timeout=timeout)
            self._thread = None
            self._loop = None
            self._ready.clear()


_shared_loop = _LoopThread()


def get_shared_loop() -> _LoopThread:
    """Return the module-wide loop thread, starting it if needed."""
    _shared_loop.start()
    return _shared_loop
