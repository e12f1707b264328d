"""Decorator API for applying rate limits and retries to functions."""

import asyncio
import inspect
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any, TypeVar, cast, overload

from rate_limiter.backoff import BackOff
from rate_limiter.clock import Clock
from rate_limiter.config import BackoffConfig, DebounceConfig, RetryPredicate, ThrottleConfig
from rate_limiter.limiters.base import BaseLimiter
from rate_limiter.limiters.debounce import Debounce
from rate_limiter.limiters.throttle import Throttle

F = TypeVar("F", bound=Callable[..., Any])
AF = TypeVar("AF", bound=Callable[..., Awaitable[Any]])


def _as_task(fn: Callable[..., Awaitable[Any]]) -> Callable[..., "asyncio.Future[Any]"]:
    """Start each invocation of coroutine function *fn* as a task.

    Limiters hand back the last result to many callers; a task can be
    awaited any number of times, a bare coroutine only once.
    """

    @wraps(fn)
    def start(*args: Any, **kwargs: Any) -> "asyncio.Future[Any]":
        return asyncio.ensure_future(fn(*args, **kwargs))

    return start


def _limit(fn: F, build: Callable[[Callable[..., Any]], BaseLimiter]) -> F:
    target = _as_task(fn) if inspect.iscoroutinefunction(fn) else fn
    limiter = build(target)

    @wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        return limiter(*args, **kwargs)

    wrapper.limiter = limiter  # type: ignore[attr-defined]
    wrapper.cancel = limiter.cancel  # type: ignore[attr-defined]
    wrapper.flush = limiter.flush  # type: ignore[attr-defined]

    return cast("F", wrapper)


@overload
def debounce(
    func: F,
    /,
) -> F: ...


@overload
def debounce(
    *,
    wait: float = 0.0,
    leading: bool = False,
    trailing: bool = True,
    max_wait: float | None = None,
    clock: Clock | None = None,
) -> Callable[[F], F]: ...


def debounce(
    func: F | None = None,
    /,
    *,
    wait: float = 0.0,
    leading: bool = False,
    trailing: bool = True,
    max_wait: float | None = None,
    clock: Clock | None = None,
) -> F | Callable[[F], F]:
    """Decorator that debounces calls to a function.

    Calls to the decorated function return immediately with the result of
    the last invocation (``None`` before the first). The function itself
    runs once the calls have paused for *wait* seconds, with the arguments
    of the latest call. Coroutine functions are started as tasks, so the
    returned result is an awaitable task.

    The wrapper exposes ``limiter`` (the :class:`Debounce`), ``cancel`` and
    ``flush``.

    Args:
        func: The function to decorate (when used without parentheses).
        wait: Quiet-period length in seconds.
        leading: Invoke on the first call of a burst.
        trailing: Invoke after the quiet period.
        max_wait: Maximum deferral in seconds, or None for no limit.
        clock: Time source; defaults to the running asyncio loop.

    Examples:
    ```python
        @debounce(wait=0.35)
        def search(query: str) -> None:
            api.search(query)

        search("p")
        search("py")  # only search("py") runs, 0.35s later
    ```
    """
    config = DebounceConfig(wait=wait, leading=leading, trailing=trailing, max_wait=max_wait)

    def decorator(fn: F) -> F:
        return _limit(fn, lambda target: Debounce.from_config(target, config, clock=clock))

    if func is not None:
        return decorator(func)

    return decorator


@overload
def throttle(
    func: F,
    /,
) -> F: ...


@overload
def throttle(
    *,
    wait: float = 0.0,
    leading: bool = True,
    trailing: bool = True,
    clock: Clock | None = None,
) -> Callable[[F], F]: ...


def throttle(
    func: F | None = None,
    /,
    *,
    wait: float = 0.0,
    leading: bool = True,
    trailing: bool = True,
    clock: Clock | None = None,
) -> F | Callable[[F], F]:
    """Decorator that runs a function at most once every *wait* seconds.

    Same wrapper surface as :func:`debounce`, backed by a :class:`Throttle`.

    Examples:
    ```python
        @throttle(wait=0.35)
        def update_progress(done: int) -> None:
            bar.update(done)
    ```
    """
    config = ThrottleConfig(wait=wait, leading=leading, trailing=trailing)

    def decorator(fn: F) -> F:
        return _limit(fn, lambda target: Throttle.from_config(target, config, clock=clock))

    if func is not None:
        return decorator(func)

    return decorator


@overload
def retry(
    func: AF,
    /,
) -> AF: ...


@overload
def retry(
    *,
    delay_factor: float = 0.2,
    randomization_factor: float = 0.25,
    max_delay: float = 30.0,
    max_attempts: int = 8,
    retry_if: RetryPredicate | None = None,
) -> Callable[[AF], AF]: ...


def retry(
    func: AF | None = None,
    /,
    *,
    delay_factor: float = 0.2,
    randomization_factor: float = 0.25,
    max_delay: float = 30.0,
    max_attempts: int = 8,
    retry_if: RetryPredicate | None = None,
) -> AF | Callable[[AF], AF]:
    """Decorator that retries an async function with exponential backoff.

    Every call of the decorated function gets its own :class:`BackOff`, so
    attempt counting starts over on each call.

    Examples:
    ```python
        @retry(max_attempts=5, retry_if=lambda e, _: isinstance(e, ConnectionError))
        async def fetch(url: str) -> bytes:
            ...
    ```
    """
    config = BackoffConfig(
        delay_factor=delay_factor,
        randomization_factor=randomization_factor,
        max_delay=max_delay,
        max_attempts=max_attempts,
        retry_if=retry_if,
    )

    def decorator(fn: AF) -> AF:
        if not inspect.iscoroutinefunction(fn):
            raise TypeError("@retry only supports async function.")

        @wraps(fn)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            return await BackOff(lambda: fn(*args, **kwargs), config=config).run()

        wrapper.config = config  # type: ignore[attr-defined]

        return cast("AF", wrapper)

    if func is not None:
        return decorator(func)

    return decorator
