"""Exceptions raised by pacer itself.

Failures coming from wrapped or retried functions are never wrapped in
these; they reach the caller as raised.
"""


class PacerError(Exception):
    """Base class for errors originating in pacer."""


class RetryInvariantError(PacerError, RuntimeError):
    """The retry loop finished without producing a result or a failure."""
