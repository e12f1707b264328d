"""Abstract base class that all rate limiters must implement."""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any


class BaseLimiter(ABC):
    """Base class for call-rate limiters.

    A limiter wraps a single function and decides, on every call, whether
    to invoke it now, schedule a later invocation, or suppress the call.
    Calls never block: they return the result of the most recent
    invocation (``None`` before the first one).

    Subclasses must implement :meth:`__call__`, :meth:`cancel`,
    :meth:`flush`, and :attr:`is_pending`. The constructor stores the
    common ``func``, ``wait``, ``leading`` and ``trailing`` settings.

    Args:
        func: The function to rate limit.
        wait: Window length in seconds.
        leading: Invoke on the leading edge of a burst.
        trailing: Invoke on the trailing edge of a burst.
    """

    __slots__ = ("func", "leading", "trailing", "wait")

    def __init__(
        self,
        func: Callable[..., Any],
        wait: float,
        *,
        leading: bool,
        trailing: bool,
    ) -> None:
        if not callable(func):
            raise TypeError(f"func must be callable, got {type(func).__name__}")

        self.func = func
        self.wait = wait
        self.leading = leading
        self.trailing = trailing

    @abstractmethod
    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        """Register a call; return the last invocation's result."""

    @abstractmethod
    def cancel(self) -> None:
        """Drop any pending invocation."""

    @abstractmethod
    def flush(self) -> Any:
        """Run a pending invocation now and return the latest result."""

    @property
    @abstractmethod
    def is_pending(self) -> bool:
        """True while a trailing-edge check is scheduled."""

    def __repr__(self) -> str:
        name = getattr(self.func, "__qualname__", repr(self.func))
        return (
            f"{type(self).__name__}({name}, wait={self.wait}, "
            f"leading={self.leading}, trailing={self.trailing}, "
            f"pending={self.is_pending})"
        )
