"""Leading-edge throttle wrapper."""

import time
from collections.abc import Callable
from typing import Any, overload

from pacer.base import CallShaper
from pacer.config import DEFAULT_THROTTLE_MS


class Throttled(CallShaper):
    """Run the wrapped function at most once per ``interval_ms``.

    The first call always runs. After that a call runs only if at least
    ``interval_ms`` have passed since the last call that was allowed to run;
    every other call is dropped, not queued.

    Allowed calls run synchronously inside ``__call__``, so exceptions from
    the wrapped function reach the caller. The timestamp is recorded before
    the call, so a call that raised still counts as the allowed one. The
    exception is an awaitable result with no running loop to schedule it
    on: that raises RuntimeError and leaves the window open.

    Args:
        fn: The function to wrap.
        interval_ms: Minimum spacing between executions, in milliseconds.
        clock: Monotonic clock returning seconds. Defaults to
               :func:`time.monotonic`.
    """

    window_name = "interval_ms"

    def __init__(
        self,
        fn: Callable[..., Any],
        interval_ms: float = DEFAULT_THROTTLE_MS,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        super().__init__(fn, interval_ms)
        self._clock = clock
        self._last_allowed: float | None = None

    @property
    def interval_ms(self) -> float:
        return self.window_ms

    @property
    def last_allowed(self) -> float | None:
        """Clock reading of the last call that ran, or None if none has."""
        return self._last_allowed

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        now = self._clock()
        if self._last_allowed is not None and now - self._last_allowed < self.window:
            return

        previous, self._last_allowed = self._last_allowed, now
        result = self.fn(*args, **kwargs)
        try:
            self._schedule(result)
        except RuntimeError:
            # nothing ran, so the window stays open
            self._last_allowed = previous
            raise

    def reset(self) -> None:
        """Forget the last allowed call so the next one runs immediately."""
        self._last_allowed = None


@overload
def throttle(
    fn: Callable[..., Any],
    /,
    interval_ms: float = DEFAULT_THROTTLE_MS,
    *,
    clock: Callable[[], float] = time.monotonic,
) -> Throttled: ...


@overload
def throttle(
    fn: None = None,
    /,
    interval_ms: float = DEFAULT_THROTTLE_MS,
    *,
    clock: Callable[[], float] = time.monotonic,
) -> Callable[[Callable[..., Any]], Throttled]: ...


def throttle(
    fn: Callable[..., Any] | None = None,
    /,
    interval_ms: float = DEFAULT_THROTTLE_MS,
    *,
    clock: Callable[[], float] = time.monotonic,
) -> Throttled | Callable[[Callable[..., Any]], Throttled]:
    """Throttle *fn* to at most one execution per ``interval_ms``.

    Works as a plain function or as a decorator, with or without arguments.

    Examples:
    ```python
        on_scroll = throttle(update_position, 100)

        @throttle(interval_ms=1000)
        def report_progress(done: int) -> None: ...
    ```
    """
    if fn is None:
        return lambda f: Throttled(f, interval_ms, clock=clock)
    return Throttled(fn, interval_ms, clock=clock)
