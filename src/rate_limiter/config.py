"""Configuration types for the rate limiter library."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from rate_limiter.errors import ConfigurationError

RetryPredicate = Callable[[BaseException, int], bool | Awaitable[bool]]


@dataclass(frozen=True, slots=True)
class DebounceConfig:
    """Configuration for a :class:`~rate_limiter.limiters.debounce.Debounce`.

    Attributes:
        wait: Quiet-period length in seconds. ``func`` runs once no call has
              arrived for this long.
        leading: Invoke on the first call of a burst.
        trailing: Invoke with the most recent arguments once the quiet
                  period ends.
        max_wait: Ceiling in seconds on how long an invocation can be
                  deferred by continuous calls. ``None`` means no ceiling.
                  Values below *wait* are clamped up to *wait* by the engine.
    """

    wait: float = 0.0
    leading: bool = False
    trailing: bool = True
    max_wait: float | None = None

    def __post_init__(self) -> None:
        if self.wait < 0:
            raise ConfigurationError(f"wait must be non-negative, got {self.wait}")

        if self.max_wait is not None and self.max_wait < 0:
            raise ConfigurationError(f"max_wait must be non-negative or None, got {self.max_wait}")

    @property
    def maxing(self) -> bool:
        return self.max_wait is not None


@dataclass(frozen=True, slots=True)
class ThrottleConfig:
    """Configuration for a :class:`~rate_limiter.limiters.throttle.Throttle`.

    Attributes:
        wait: Window length in seconds; ``func`` fires at most once per window.
        leading: Invoke on the first call of a window.
        trailing: Invoke with the most recent arguments at the window's end.
    """

    wait: float = 0.0
    leading: bool = True
    trailing: bool = True

    def __post_init__(self) -> None:
        if self.wait < 0:
            raise ConfigurationError(f"wait must be non-negative, got {self.wait}")

    def to_debounce(self) -> DebounceConfig:
        """Debounce settings equivalent to this throttle: a ceiling equal to *wait*."""
        return DebounceConfig(
            wait=self.wait,
            leading=self.leading,
            trailing=self.trailing,
            max_wait=self.wait,
        )


@dataclass(frozen=True, slots=True)
class BackoffConfig:
    """Configuration for a :class:`~rate_limiter.backoff.BackOff` runner.

    With the defaults a function is tried up to 8 times, sleeping
    0.4s, 0.8s, 1.6s, ... 25.6s (each +/- 25%) between attempts.

    Attributes:
        delay_factor: Base delay in seconds, doubled on every attempt.
        randomization_factor: Fraction (0 to 1) by which each delay is
                              randomly increased or decreased.
        max_delay: Upper bound in seconds on any single delay.
        max_attempts: Total number of tries, including the first one.
        retry_if: Optional ``(error, attempt) -> bool`` predicate, sync or
                  async. Returning ``False`` stops retrying immediately.
                  ``None`` retries every error.
    """

    delay_factor: float = 0.2
    randomization_factor: float = 0.25
    max_delay: float = 30.0
    max_attempts: int = 8
    retry_if: RetryPredicate | None = None

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ConfigurationError(f"max_attempts must be at least 1, got {self.max_attempts}")

        if not 0.0 <= self.randomization_factor <= 1.0:
            raise ConfigurationError(
                f"randomization_factor must be between 0 and 1, got {self.randomization_factor}"
            )

        if self.delay_factor < 0:
            raise ConfigurationError(f"delay_factor must be non-negative, got {self.delay_factor}")

        if self.max_delay < 0:
            raise ConfigurationError(f"max_delay must be non-negative, got {self.max_delay}")
