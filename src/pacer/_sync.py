"""Background event loop that lets blocking code run pacer's coroutines.

Used by :func:`pacer.retry.retry_sync`. One daemon thread owns one loop;
coroutines are handed over with :meth:`_LoopThread.submit` and come back as
:class:`concurrent.futures.Future` objects the caller can block on.
"""

import asyncio
import threading
from collections.abc import Coroutine
from concurrent.futures import Future
from typing import Any, TypeVar

T = TypeVar("T")


class _LoopThread:
    """A daemon thread running one event loop until :meth:`shutdown`."""

    __slots__ = ("_lock", "_loop", "_thread")

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._loop: asyncio.AbstractEventLoop | None = None
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        with self._lock:
            return self._thread is not None

    def start(self) -> asyncio.AbstractEventLoop:
        """Start the thread if needed and return its loop."""
        with self._lock:
            if self._loop is None:
                loop = asyncio.new_event_loop()
                thread = threading.Thread(
                    target=self._serve, args=(loop,), name="pacer-loop", daemon=True
                )
                thread.start()
                self._loop, self._thread = loop, thread
            return self._loop

    @staticmethod
    def _serve(loop: asyncio.AbstractEventLoop) -> None:
        asyncio.set_event_loop(loop)
        try:
            loop.run_forever()
        finally:
            loop.close()

    def submit(self, coro: Coroutine[Any, Any, T]) -> "Future[T]":
        """Schedule *coro* on the background loop, starting it if needed."""
        return asyncio.run_coroutine_threadsafe(coro, self.start())

    def shutdown(self, timeout: float = 5.0) -> None:
        """Stop the loop, wait for the thread to exit and close the loop."""
        with self._lock:
            loop, thread = self._loop, self._thread
            self._loop = self._thread = None

        if loop is None or thread is None:
            return
        loop.call_soon_threadsafe(loop.stop)
        thread.join(timeout)


_shared_loop = _LoopThread()


def get_shared_loop() -> _LoopThread:
    """Return the process-wide background loop, starting it if needed."""
    _shared_loop.start()
    return _shared_loop
