"""rate_limiter — debounce, throttle and exponential backoff for Python callables.

Debounce and throttle wrap a function and control how often it runs.
Calls never block; timers run on the asyncio event loop (or any other
:class:`Clock`).

Basic usage:

    from rate_limiter import Debounce, Throttle

    debounced = Debounce(save, 0.35)
    debounced(doc)          # save(doc) runs once calls pause for 0.35s
    debounced.flush()       # or right now
    debounced.cancel()      # or never

    throttled = Throttle(update_progress, 0.1)

Decorator usage:

    from rate_limiter import debounce, retry

    @debounce(wait=0.35)
    def search(query: str) -> None: ...

    @retry(max_attempts=5)
    async def fetch(url: str) -> bytes: ...

Retrying a single call:

    from rate_limiter import back_off

    data = await back_off(lambda: client.get(url), max_attempts=3)
"""

from rate_limiter.backoff import BackOff, back_off
from rate_limiter.clock import Clock, LoopClock, ManualClock
from rate_limiter.config import BackoffConfig, DebounceConfig, ThrottleConfig
from rate_limiter.decorator import debounce, retry, throttle
from rate_limiter.errors import ConfigurationError, RateLimiterError
from rate_limiter.limiters.base import BaseLimiter
from rate_limiter.limiters.debounce import Debounce
from rate_limiter.limiters.throttle import Throttle

__all__ = [
    "BackOff",
    "BackoffConfig",
    "BaseLimiter",
    "Clock",
    "ConfigurationError",
    "Debounce",
    "DebounceConfig",
    "LoopClock",
    "ManualClock",
    "RateLimiterError",
    "Throttle",
    "ThrottleConfig",
    "back_off",
    "debounce",
    "retry",
    "throttle",
]

__version__ = "0.1.0"
