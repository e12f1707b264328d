"""Exception types raised by the rate limiter library itself.

Errors raised by wrapped functions are never translated: they propagate
to the caller unchanged.
"""


class RateLimiterError(Exception):
    """Base class for errors raised by this library."""


class ConfigurationError(RateLimiterError, ValueError):
    """Invalid limiter or backoff configuration."""
