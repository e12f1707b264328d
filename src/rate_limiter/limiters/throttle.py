"""Throttle: a debounce whose max_wait equals its wait."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rate_limiter.config import ThrottleConfig
from rate_limiter.limiters.base import BaseLimiter
from rate_limiter.limiters.debounce import Debounce

if TYPE_CHECKING:
    from collections.abc import Callable

    from rate_limiter.clock import Clock


class Throttle(BaseLimiter):
    """Invoke ``func`` at most once per ``wait`` seconds.

    Delegates every operation to an inner :class:`Debounce` configured with
    ``max_wait=wait``, so continuous calls still make progress: ``func``
    fires once per window instead of being deferred forever.

    With the default ``leading=True, trailing=True`` the first call runs
    ``func`` immediately; further calls inside the window return that
    result and queue one trailing invocation with the latest arguments.

    Args:
        func: The function to throttle.
        wait: Window length in seconds.
        leading: Invoke on the first call of a window.
        trailing: Invoke with the latest arguments when the window ends.
        clock: Time source; defaults to the running asyncio loop.
    """

    __slots__ = ("_config", "_inner")

    def __init__(
        self,
        func: Callable[..., Any],
        wait: float,
        *,
        leading: bool = True,
        trailing: bool = True,
        clock: Clock | None = None,
    ) -> None:
        config = ThrottleConfig(wait=wait, leading=leading, trailing=trailing)
        super().__init__(func, config.wait, leading=config.leading, trailing=config.trailing)
        self._config = config
        self._inner = Debounce.from_config(func, config.to_debounce(), clock=clock)

    @classmethod
    def from_config(
        cls,
        func: Callable[..., Any],
        config: ThrottleConfig,
        *,
        clock: Clock | None = None,
    ) -> Throttle:
        return cls(func, config.wait, leading=config.leading, trailing=config.trailing, clock=clock)

    @property
    def config(self) -> ThrottleConfig:
        return self._config

    @property
    def result(self) -> Any:
        """Return value of the most recent invocation."""
        return self._inner.result

    @property
    def is_pending(self) -> bool:
        return self._inner.is_pending

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return self._inner(*args, **kwargs)

    def cancel(self) -> None:
        self._inner.cancel()

    def flush(self) -> Any:
        return self._inner.flush()
