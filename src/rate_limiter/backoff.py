"""Retry a function with exponentially growing, jittered delays."""

from __future__ import annotations

import asyncio
import inspect
import logging
import random
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from rate_limiter._sync import get_shared_loop
from rate_limiter.config import BackoffConfig

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from rate_limiter.config import RetryPredicate

T = TypeVar("T")

logger = logging.getLogger(__name__)

# 2 ** 31 is already far beyond any sensible max_delay.
_MAX_EXPONENT = 31


class BackOff(Generic[T]):
    """Run ``func``, retrying failures with exponential backoff.

    Attempt ``n`` (1-based) that fails is followed by a sleep of
    ``delay_factor * 2 ** n``, randomized by ``randomization_factor`` and
    capped at ``max_delay``, then ``func`` is tried again. The first
    invocation counts as attempt 1, so ``func`` runs at most
    ``max_attempts`` times.

    On the last attempt, or when ``retry_if`` returns ``False``, the error is
    re-raised unchanged.

    Args:
        func: Zero-argument callable. May be a plain function or return an
              awaitable.
        config: Delay and attempt settings. Defaults to :class:`BackoffConfig`.
        sleep: Coroutine function used to wait between attempts.
        rng: Random source for jitter.

    Example::

        response = await BackOff(
            lambda: client.get("/status"),
            config=BackoffConfig(retry_if=lambda e, _: isinstance(e, TimeoutError)),
        ).run()
    """

    __slots__ = ("_config", "_rng", "_sleep", "func")

    def __init__(
        self,
        func: Callable[[], T | Awaitable[T]],
        *,
        config: BackoffConfig | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        rng: random.Random | None = None,
    ) -> None:
        self.func = func
        self._config = config or BackoffConfig()
        self._sleep = sleep
        self._rng = rng or random.Random()

    @property
    def config(self) -> BackoffConfig:
        return self._config

    def get_sleep_duration(self, attempt: int) -> float:
        """Seconds to sleep after failed *attempt* (1-based)."""
        cfg = self._config
        jitter = 1 + cfg.randomization_factor * self._rng.uniform(-1.0, 1.0)
        exp = min(attempt, _MAX_EXPONENT)
        delay = cfg.delay_factor * 2.0**exp * jitter
        return min(delay, cfg.max_delay)

    async def run(self) -> T:
        """Call ``func`` until it succeeds or retrying stops, returning its value."""
        attempt = 0
        while True:
            attempt += 1
            try:
                result = self.func()
                if inspect.isawaitable(result):
                    result = await result
                return result
            except Exception as error:
                if attempt >= self._config.max_attempts:
                    logger.debug("Giving up after %s attempts: %r", attempt, error)
                    raise

                if not await self._should_retry(error, attempt):
                    logger.debug("Retry rejected on attempt %s: %r", attempt, error)
                    raise

                delay = self.get_sleep_duration(attempt)
                logger.debug("Attempt %s failed with %r, retrying in %.3fs", attempt, error, delay)

            await self._sleep(delay)

    def run_sync(self) -> T:
        """Blocking variant of :meth:`run` for synchronous callers."""
        return get_shared_loop().run_coroutine(self.run())

    def __call__(self) -> Awaitable[T]:
        return self.run()

    async def _should_retry(self, error: Exception, attempt: int) -> bool:
        predicate = self._config.retry_if
        if predicate is None:
            return True
        verdict = predicate(error, attempt)
        if inspect.isawaitable(verdict):
            verdict = await verdict
        return verdict is not False

    def __repr__(self) -> str:
        cfg = self._config
        return (
            f"BackOff(delay_factor={cfg.delay_factor}, "
            f"randomization_factor={cfg.randomization_factor}, "
            f"max_delay={cfg.max_delay}, max_attempts={cfg.max_attempts})"
        )


async def back_off(
    func: Callable[[], T | Awaitable[T]],
    *,
    delay_factor: float = 0.2,
    randomization_factor: float = 0.25,
    max_delay: float = 30.0,
    max_attempts: int = 8,
    retry_if: RetryPredicate | None = None,
) -> T:
    """Run *func* through a :class:`BackOff` built from these options."""
    config = BackoffConfig(
        delay_factor=delay_factor,
        randomization_factor=randomization_factor,
        max_delay=max_delay,
        max_attempts=max_attempts,
        retry_if=retry_if,
    )
    return await BackOff(func, config=config).run()
