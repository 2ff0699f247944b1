"""Trailing-edge debounce wrapper driven by the event loop's timers."""

from asyncio import TimerHandle, get_running_loop
from collections.abc import Callable
from typing import Any, overload

from pacer.base import CallShaper
from pacer.config import DEFAULT_DEBOUNCE_MS


class Debounced(CallShaper):
    """Run the wrapped function once calls stop arriving for ``delay_ms``.

    How it works:
        - Every call cancels the pending timer (if any) and starts a new one
          carrying that call's arguments.
        - When a timer expires, the wrapped function runs with the arguments
          of the call that started it.

    Example::

        delay_ms=300

        t=0ms   save("a")   -> schedule save("a") at t=300
        t=100ms save("ab")  -> cancel, schedule save("ab") at t=400
        t=400ms timer fires -> save("ab")

    Calls return immediately with ``None``. They must be made from inside a
    running event loop. Exceptions raised by a timer-driven invocation go to
    the loop's exception handler; a coroutine function's exceptions stay on
    its task.
    """

    window_name = "delay_ms"

    def __init__(self, fn: Callable[..., Any], delay_ms: float = DEFAULT_DEBOUNCE_MS) -> None:
        super().__init__(fn, delay_ms)
        self._timer_handle: TimerHandle | None = None
        self._pending_call: tuple[tuple[Any, ...], dict[str, Any]] | None = None

    @property
    def delay_ms(self) -> float:
        return self.window_ms

    @property
    def pending(self) -> bool:
        """Whether an invocation is scheduled and has not run yet."""
        return self._timer_handle is not None

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        """Replace any pending invocation with one for these arguments."""
        loop = get_running_loop()

        if self._timer_handle is not None:
            self._timer_handle.cancel()

        self._pending_call = (args, kwargs)
        self._timer_handle = loop.call_later(self.window, self._fire)

    def cancel(self) -> bool:
        """Drop the pending invocation. Returns True if there was one."""
        if self._timer_handle is None:
            return False
        self._timer_handle.cancel()
        self._timer_handle = None
        self._pending_call = None
        return True

    def flush(self) -> bool:
        """Run the pending invocation now instead of waiting for its timer.

        Returns True if something ran. Exceptions from a synchronous wrapped
        function propagate to the caller of ``flush``.
        """
        if self._timer_handle is None:
            return False
        self._timer_handle.cancel()
        self._fire()
        return True

    def reset(self) -> None:
        self.cancel()

    def _fire(self) -> None:
        if self._pending_call is None:
            return

        args, kwargs = self._pending_call
        self._timer_handle = None
        self._pending_call = None
        self._invoke(args, kwargs)


@overload
def debounce(fn: Callable[..., Any], /, delay_ms: float = DEFAULT_DEBOUNCE_MS) -> Debounced: ...


@overload
def debounce(
    fn: None = None,
    /,
    delay_ms: float = DEFAULT_DEBOUNCE_MS,
) -> Callable[[Callable[..., Any]], Debounced]: ...


def debounce(
    fn: Callable[..., Any] | None = None,
    /,
    delay_ms: float = DEFAULT_DEBOUNCE_MS,
) -> Debounced | Callable[[Callable[..., Any]], Debounced]:
    """Debounce *fn* so that only the last call in a burst runs.

    Works as a plain function or as a decorator, with or without arguments.

    Args:
        fn: The function to wrap.
        delay_ms: Quiet period in milliseconds.

    Examples:
    ```python
        on_resize = debounce(redraw, 200)

        @debounce
        def autosave(text: str) -> None: ...

        @debounce(delay_ms=500)
        async def search(query: str) -> None: ...
    ```
    """
    if fn is None:
        return lambda f: Debounced(f, delay_ms)
    return Debounced(fn, delay_ms)
