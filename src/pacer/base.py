"""Abstract base class shared by the debounce and throttle wrappers."""

import asyncio
import inspect
import math
from abc import ABC, abstractmethod
from collections.abc import Callable
from functools import update_wrapper
from typing import Any


class CallShaper(ABC):
    """Base class for wrappers that shape when a function gets called.

    Each instance owns the wrapped callable and a window length in
    milliseconds. The wrapped function's ``__name__``, ``__doc__`` and
    friends are copied onto the wrapper so it can stand in for the
    function it decorates.

    Coroutine functions are supported: when the wrapped function returns an
    awaitable it is scheduled as a task on the running loop and never
    awaited by the wrapper. The wrapper keeps a reference to each task until
    it finishes.

    Subclasses must implement :meth:`__call__` and :meth:`reset`.

    Args:
        fn: The callable to wrap.
        window_ms: Window length in milliseconds. Must be non-negative.
    """

    window_name = "window_ms"

    def __init__(self, fn: Callable[..., Any], window_ms: float) -> None:
        if not callable(fn):
            raise TypeError(f"{type(self).__name__} expects a callable, got {type(fn).__name__}")

        if isinstance(window_ms, bool) or not isinstance(window_ms, int | float):
            raise TypeError(f"{self.window_name} must be a number, got {type(window_ms).__name__}")

        if not math.isfinite(window_ms):
            raise ValueError(f"{self.window_name} must be finite, got {window_ms}")

        if window_ms < 0:
            raise ValueError(f"{self.window_name} must be non-negative, got {window_ms}")

        update_wrapper(self, fn)
        self.fn = fn
        self.window_ms = window_ms
        self._tasks: set[asyncio.Future[Any]] = set()

    @property
    def window(self) -> float:
        """Window length in seconds, as asyncio and the clocks expect it."""
        return self.window_ms / 1000

    def _invoke(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> None:
        self._schedule(self.fn(*args, **kwargs))

    def _schedule(self, result: Any) -> None:
        """Run an awaitable result as a task on the running loop.

        Raises RuntimeError without a running loop; a coroutine result is
        closed first so it is not left unawaited.
        """
        if not inspect.isawaitable(result):
            return

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            if inspect.iscoroutine(result):
                result.close()
            raise RuntimeError(
                f"{self!r} returned an awaitable but no event loop is running"
            ) from None

        task = asyncio.ensure_future(result, loop=loop)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    @abstractmethod
    def __call__(self, *args: Any, **kwargs: Any) -> None:
        """Offer a call; the subclass decides whether and when it runs."""

    @abstractmethod
    def reset(self) -> None:
        """Return the wrapper to its freshly constructed state."""

    def __repr__(self) -> str:
        name = getattr(self.fn, "__qualname__", repr(self.fn))
        return f"{type(self).__name__}(fn={name}, {self.window_name}={self.window_ms})"
