"""Debounce engine with leading/trailing edges and an optional max_wait."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from rate_limiter.clock import Clock, LoopClock
from rate_limiter.config import DebounceConfig
from rate_limiter.limiters.base import BaseLimiter

if TYPE_CHECKING:
    from collections.abc import Callable

    from rate_limiter.clock import TimerHandle

logger = logging.getLogger(__name__)

# Slack for float drift when comparing elapsed time against wait/max_wait,
# in the same spirit as asyncio's clock resolution.
_CLOCK_RESOLUTION = 1e-9


class Debounce(BaseLimiter):
    """Delay invoking ``func`` until ``wait`` seconds have passed without a call.

    How it works:
        - Every call records its arguments and the call time.
        - A single timer checks for the quiet period. If calls kept arriving
          it is re-armed for the remaining wait; otherwise the trailing edge
          runs ``func`` with the most recent arguments.
        - ``leading=True`` also runs ``func`` on the first call of a burst.
          With both edges enabled, the trailing call only happens if the
          limiter was called more than once during the window.
        - ``max_wait`` caps how long continuous calls can defer ``func``.

    Every call returns the result of the last invocation, or ``None`` if
    ``func`` has not run yet.

    Example::

        wait=0.032

        t=0.000 debounced("a") -> None, timer armed
        t=0.005 debounced("b") -> None
        t=0.010 debounced("c") -> None
        t=0.032 timer fires    -> only 0.022s quiet, re-armed for 0.010s
        t=0.042 timer fires    -> func("c")

    With ``wait=0`` and ``leading=False`` the invocation is deferred to the
    next tick of the clock, never run inline.

    Complexity:
        Time:   O(1) per call
        Memory: O(1), only the latest arguments are kept
    """

    __slots__ = (
        "_clock",
        "_config",
        "_last_args",
        "_last_call_time",
        "_last_invoke_time",
        "_last_kwargs",
        "_max_wait",
        "_result",
        "_timer",
    )

    def __init__(
        self,
        func: Callable[..., Any],
        wait: float,
        *,
        leading: bool = False,
        trailing: bool = True,
        max_wait: float | None = None,
        clock: Clock | None = None,
    ) -> None:
        config = DebounceConfig(wait=wait, leading=leading, trailing=trailing, max_wait=max_wait)
        super().__init__(func, config.wait, leading=config.leading, trailing=config.trailing)
        self._config = config
        self._clock: Clock = clock or LoopClock()
        self._max_wait: float | None = None if max_wait is None else max(max_wait, wait)

        self._last_args: tuple[Any, ...] | None = None
        self._last_kwargs: dict[str, Any] | None = None
        self._timer: TimerHandle | None = None
        self._last_call_time: float | None = None
        self._last_invoke_time: float = 0.0
        self._result: Any = None

    @classmethod
    def from_config(
        cls,
        func: Callable[..., Any],
        config: DebounceConfig,
        *,
        clock: Clock | None = None,
    ) -> Debounce:
        return cls(
            func,
            config.wait,
            leading=config.leading,
            trailing=config.trailing,
            max_wait=config.max_wait,
            clock=clock,
        )

    @property
    def config(self) -> DebounceConfig:
        return self._config

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def max_wait(self) -> float | None:
        """Effective ceiling, never below ``wait``."""
        return self._max_wait

    @property
    def maxing(self) -> bool:
        return self._max_wait is not None

    @property
    def result(self) -> Any:
        """Return value of the most recent invocation."""
        return self._result

    @property
    def is_pending(self) -> bool:
        return self._timer is not None

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        """Register a call with these arguments.

        Returns the result of the last invocation, which is this call's own
        result when it triggered ``func`` synchronously.
        """
        time = self._clock.now()
        is_invoking = self._should_invoke(time)

        self._last_args = args
        self._last_kwargs = kwargs
        self._last_call_time = time

        if is_invoking:
            if self._timer is None:
                return self._leading_edge(time)
            if self.maxing:
                # Calls in a tight loop: the ceiling was hit before the timer
                # got a chance to fire.
                logger.debug("%r: max_wait reached, forcing invocation", self)
                self._restart_timer(self.wait)
                return self._invoke(time)

        if self._timer is None:
            self._timer = self._clock.call_later(self.wait, self._timer_expired)
        return self._result

    def cancel(self) -> None:
        """Drop the pending invocation and forget the current burst.

        ``result`` is kept. Calling this with nothing pending is a no-op.
        """
        if self._timer is not None:
            logger.debug("%r: cancelled", self)
            self._timer.cancel()
        self._last_invoke_time = 0.0
        self._last_call_time = None
        self._last_args = self._last_kwargs = None
        self._timer = None

    def flush(self) -> Any:
        """Run the trailing edge now if one is pending.

        Returns the latest result; with nothing pending this is just
        ``result``.
        """
        if self._timer is None:
            return self._result
        logger.debug("%r: flushing", self)
        return self._trailing_edge(self._clock.now())

    def _should_invoke(self, time: float) -> bool:
        if self._last_call_time is None:
            return True

        since_last_call = time - self._last_call_time
        since_last_invoke = time - self._last_invoke_time

        # Activity stopped, the clock went backwards, or max_wait is hit.
        return (
            since_last_call >= self.wait - _CLOCK_RESOLUTION
            or since_last_call < 0
            or (
                self._max_wait is not None
                and since_last_invoke >= self._max_wait - _CLOCK_RESOLUTION
            )
        )

    def _remaining_wait(self, time: float) -> float:
        assert self._last_call_time is not None
        since_last_call = time - self._last_call_time
        since_last_invoke = time - self._last_invoke_time
        waiting = self.wait - since_last_call

        if self._max_wait is None:
            return waiting
        return min(waiting, self._max_wait - since_last_invoke)

    def _invoke(self, time: float) -> Any:
        args = self._last_args or ()
        kwargs = self._last_kwargs or {}
        self._last_invoke_time = time
        self._last_args = self._last_kwargs = None
        self._result = self.func(*args, **kwargs)
        return self._result

    def _leading_edge(self, time: float) -> Any:
        # Start a new max_wait window.
        self._last_invoke_time = time
        self._timer = self._clock.call_later(self.wait, self._timer_expired)
        if self.leading:
            logger.debug("%r: leading edge invocation", self)
            return self._invoke(time)
        return self._result

    def _trailing_edge(self, time: float) -> Any:
        self._cancel_timer()

        # Only invoke if there were calls since the last invocation.
        if self.trailing and self._last_args is not None:
            logger.debug("%r: trailing edge invocation", self)
            return self._invoke(time)
        self._last_args = self._last_kwargs = None
        return self._result

    def _timer_expired(self) -> None:
        self._timer = None
        time = self._clock.now()
        if self._should_invoke(time):
            self._trailing_edge(time)
        else:
            self._restart_timer(self._remaining_wait(time))

    def _restart_timer(self, delay: float) -> None:
        self._cancel_timer()
        self._timer = self._clock.call_later(delay, self._timer_expired)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
