"""Pacer — timing primitives for shaping calls on asyncio.

Provides debounce, throttle, an awaitable millisecond delay, and retry
with a fixed pause between attempts.

Basic usage:

    from pacer import RetryOptions, debounce, retry, throttle, wait

    save = debounce(write_draft, 300)      # only the last call in a burst runs
    track = throttle(send_position, 100)   # at most one call per 100ms

    await wait(50)

    body = await retry(
        lambda: fetch(url),
        RetryOptions(retries=3, delay_ms=500, should_retry=is_transient),
    )

Decorator usage:

    from pacer import debounce, retrying

    @debounce(delay_ms=500)
    async def search(query: str) -> None: ...

    @retrying(retries=3)
    async def fetch(url: str) -> bytes: ...
"""

from pacer.base import CallShaper
from pacer.config import RetryOptions, always_retry
from pacer.debounce import Debounced, debounce
from pacer.errors import PacerError, RetryInvariantError
from pacer.retry import retry, retry_sync, retrying
from pacer.throttle import Throttled, throttle
from pacer.wait import wait

__all__ = [
    "CallShaper",
    "Debounced",
    "PacerError",
    "RetryInvariantError",
    "RetryOptions",
    "Throttled",
    "always_retry",
    "debounce",
    "retry",
    "retry_sync",
    "retrying",
    "throttle",
    "wait",
]

__version__ = "0.1.0"
