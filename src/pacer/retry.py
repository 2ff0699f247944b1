"""Retry an asynchronous operation with a fixed delay between attempts."""

import inspect
import logging
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import ParamSpec, TypeVar, cast

from pacer._sync import get_shared_loop
from pacer.config import DEFAULT_RETRY_DELAY_MS, RetryOptions, always_retry
from pacer.errors import RetryInvariantError
from pacer.wait import wait

logger = logging.getLogger(__name__)

T = TypeVar("T")
P = ParamSpec("P")


async def retry(fn: Callable[[], Awaitable[T]], options: RetryOptions) -> T:
    """Await ``fn()`` until it succeeds or the retry policy says stop.

    Attempts run strictly one after another. After a failure the policy is
    checked in order: a spent budget stops first, then ``should_retry`` is
    asked. When retrying, the task sleeps ``options.delay_ms`` before the
    next attempt.

    Only :class:`Exception` counts as a failure; cancellation and other
    ``BaseException`` subclasses pass straight through. If ``should_retry``
    itself raises, that exception propagates with the attempt's failure as
    its ``__cause__``.

    Args:
        fn: Zero-argument callable returning an awaitable.
        options: The retry policy.

    Returns:
        The first successful result.

    Raises:
        Exception: The failure of the last attempt, unchanged.
        TypeError: ``fn`` returned something that is not awaitable. Not retried.
        RetryInvariantError: The attempt loop ended without an outcome.
    """
    attempt = 0
    while attempt <= options.retries:
        try:
            pending = fn()
        except Exception as exc:
            failure = exc
        else:
            if not inspect.isawaitable(pending):
                kind = type(pending).__name__
                raise TypeError(f"retry expects fn to return an awaitable, got {kind}")
            try:
                return await pending
            except Exception as exc:
                failure = exc

        if attempt == options.retries:
            logger.debug("giving up after %d attempt(s): %r", attempt + 1, failure)
            raise failure

        try:
            keep_going = options.should_retry(failure)
        except Exception as exc:
            raise exc from failure

        if not keep_going:
            logger.debug("not retrying %r after attempt %d", failure, attempt + 1)
            raise failure

        attempt += 1
        logger.debug(
            "retry %d/%d in %sms after %r", attempt, options.retries, options.delay_ms, failure
        )
        await wait(options.delay_ms)

    raise RetryInvariantError(f"retry loop exited after {attempt} attempt(s) without a result")


def retry_sync(fn: Callable[[], Awaitable[T]], options: RetryOptions) -> T:
    """Blocking form of :func:`retry` for code that has no event loop.

    The attempts run on pacer's shared background loop; the calling thread
    blocks until :func:`retry` returns or raises. Must not be called from a
    coroutine running on that same loop.
    """
    return get_shared_loop().submit(retry(fn, options)).result()


def retrying(
    options: RetryOptions | None = None,
    /,
    *,
    retries: int | None = None,
    delay_ms: float = DEFAULT_RETRY_DELAY_MS,
    should_retry: Callable[[Exception], bool] = always_retry,
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, Awaitable[T]]]:
    """Decorator that retries every call of an async function.

    Pass a ready :class:`RetryOptions`, or the same fields as keywords.

    Examples:
    ```python
        @retrying(retries=3, delay_ms=250)
        async def fetch(url: str) -> bytes: ...

        policy = RetryOptions(retries=5, should_retry=lambda e: isinstance(e, TimeoutError))

        @retrying(policy)
        async def connect() -> None: ...
    ```
    """
    if options is None:
        if retries is None:
            raise TypeError("retrying() needs either RetryOptions or retries=")
        options = RetryOptions(retries=retries, delay_ms=delay_ms, should_retry=should_retry)

    def decorator(fn: Callable[P, Awaitable[T]]) -> Callable[P, Awaitable[T]]:
        if not inspect.iscoroutinefunction(fn):
            raise TypeError("@retrying only supports async functions.")

        @wraps(fn)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            return await retry(lambda: fn(*args, **kwargs), options)

        wrapper.options = options  # type: ignore[attr-defined]

        return cast("Callable[P, Awaitable[T]]", wrapper)

    return decorator

