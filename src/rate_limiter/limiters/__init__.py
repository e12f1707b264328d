from rate_limiter.limiters.base import BaseLimiter
from rate_limiter.limiters.debounce import Debounce
from rate_limiter.limiters.throttle import Throttle

__all__ = [
    "BaseLimiter",
    "Debounce",
    "Throttle",
]
