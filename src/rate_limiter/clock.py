"""Time sources and timer scheduling used by the limiters.

A :class:`Clock` reads the current time and schedules callbacks. The
limiters never sleep or block; they only read ``now()`` and schedule a
single pending callback through ``call_later()``.
"""

from __future__ import annotations

import heapq
import itertools
from abc import ABC, abstractmethod
from asyncio import AbstractEventLoop, get_running_loop
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Callable


class TimerHandle(Protocol):
    """Anything returned by :meth:`Clock.call_later` that can be cancelled."""

    def cancel(self) -> None: ...


class Clock(ABC):
    """Base class for time sources.

    Subclasses must implement :meth:`now` and :meth:`call_later`. Times are
    expressed in seconds as floats.
    """

    __slots__ = ()

    @abstractmethod
    def now(self) -> float:
        """Current time in seconds."""

    @abstractmethod
    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        """Run *callback* once *delay* seconds have elapsed."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class LoopClock(Clock):
    """Clock backed by an asyncio event loop.

    The loop is resolved lazily with :func:`asyncio.get_running_loop` on
    first use unless one is passed explicitly, so a limiter may be created
    outside of a coroutine and used from inside one.

    ``call_later(0, ...)`` runs the callback on the next loop iteration,
    never inline.
    """

    __slots__ = ("_loop",)

    def __init__(self, loop: AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def _get_loop(self) -> AbstractEventLoop:
        if self._loop is None:
            self._loop = get_running_loop()
        return self._loop

    def now(self) -> float:
        return self._get_loop().time()

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        return self._get_loop().call_later(delay, callback)


class ManualTimer:
    """Handle for a callback scheduled on a :class:`ManualClock`."""

    __slots__ = ("callback", "cancelled", "when")

    def __init__(self, when: float, callback: Callable[[], None]) -> None:
        self.when = when
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True

    def __repr__(self) -> str:
        state = "cancelled" if self.cancelled else "scheduled"
        return f"ManualTimer(when={self.when}, {state})"


class ManualClock(Clock):
    """Virtual clock that only moves when told to.

    Useful for deterministic hosts and tests: nothing fires until
    :meth:`advance` (or :meth:`run_pending`) is called, and timers fire in
    deadline order, ties broken by scheduling order.

    Example::

        clock = ManualClock()
        debounced = Debounce(save, 0.032, clock=clock)

        debounced("a")
        clock.advance(0.005)
        debounced("b")
        clock.advance(0.1)   # save("b") runs here
    """

    __slots__ = ("_counter", "_queue", "_time")

    def __init__(self, start: float = 0.0) -> None:
        self._time = start
        self._queue: list[tuple[float, int, ManualTimer]] = []
        self._counter = itertools.count()

    def now(self) -> float:
        return self._time

    def call_later(self, delay: float, callback: Callable[[], None]) -> ManualTimer:
        timer = ManualTimer(self._time + max(0.0, delay), callback)
        heapq.heappush(self._queue, (timer.when, next(self._counter), timer))
        return timer

    @property
    def pending(self) -> list[ManualTimer]:
        """Timers that are scheduled and not cancelled, earliest first."""
        return [timer for _, _, timer in sorted(self._queue) if not timer.cancelled]

    def set_time(self, value: float) -> None:
        """Jump to *value* without firing anything. May move backwards."""
        self._time = value

    def advance(self, seconds: float) -> None:
        """Move time forward by *seconds*, firing every timer that falls due.

        Each timer runs with the clock set to its own deadline, so callbacks
        observe the time they were scheduled for. Timers scheduled by a
        callback fire in the same call if they fall within the window.
        """
        if seconds < 0:
            raise ValueError(f"seconds must be non-negative, got {seconds}")

        target = self._time + seconds
        while self._queue and self._queue[0][0] <= target:
            when, _, timer = heapq.heappop(self._queue)
            if timer.cancelled:
                continue
            self._time = max(self._time, when)
            timer.callback()
        self._time = target

    def run_pending(self) -> None:
        """Fire timers that are already due at the current time."""
        self.advance(0.0)

    def __repr__(self) -> str:
        return f"ManualClock(now={self._time}, pending={len(self.pending)})"
