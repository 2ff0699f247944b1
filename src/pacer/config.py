"""Configuration types for the pacer library."""

import math
from collections.abc import Callable
from dataclasses import dataclass

DEFAULT_DEBOUNCE_MS = 300
DEFAULT_THROTTLE_MS = 300
DEFAULT_RETRY_DELAY_MS = 1000


def always_retry(_: Exception) -> bool:
    """Default retry predicate: every failure is worth another attempt."""
    return True


@dataclass(frozen=True, slots=True)
class RetryOptions:
    """Retry policy for :func:`pacer.retry`.

    Attributes:
        retries: Number of retries after the first attempt. ``0`` means a
                 single attempt with no retry.
        delay_ms: Pause in milliseconds between a failed attempt and the
                  next one. Never applied before the first attempt or after
                  the final failure.
        should_retry: Predicate over the raised exception. Returning False
                      stops retrying and re-raises the exception, whatever
                      budget remains.
    """

    retries: int
    delay_ms: float = DEFAULT_RETRY_DELAY_MS
    should_retry: Callable[[Exception], bool] = always_retry

    def __post_init__(self) -> None:
        if isinstance(self.retries, bool) or not isinstance(self.retries, int):
            raise TypeError(f"retries must be an int, got {type(self.retries).__name__}")

        if self.retries < 0:
            raise ValueError(f"retries must be non-negative, got {self.retries}")

        if isinstance(self.delay_ms, bool) or not isinstance(self.delay_ms, int | float):
            raise TypeError(f"delay_ms must be a number, got {type(self.delay_ms).__name__}")

        if not math.isfinite(self.delay_ms):
            raise ValueError(f"delay_ms must be finite, got {self.delay_ms}")

        if self.delay_ms < 0:
            raise ValueError(f"delay_ms must be non-negative, got {self.delay_ms}")

        if not callable(self.should_retry):
            raise TypeError("should_retry must be callable")
