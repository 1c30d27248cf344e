r"""Configuration dataclasses for retry behavior.

This module provides configuration objects for the retry policy and
the observer callbacks of a request.
"""

from __future__ import annotations

__all__ = [
    "CallbackConfig",
    "ExceptionCallback",
    "ResultCallback",
    "RetryCallback",
    "RetryPolicy",
]

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from resthandler.backoff.fixed import FixedBackoff
from resthandler.core.config import DEFAULT_RETRY_DELAY
from resthandler.core.validation import validate_max_attempts

if TYPE_CHECKING:
    from resthandler.result import RequestResult

ResultCallback = Callable[["RequestResult"], None]
ExceptionCallback = Callable[[Exception], None]
RetryCallback = Callable[["RequestResult", int, float], None]


def _default_delay() -> Callable[[int], float]:
    return FixedBackoff(DEFAULT_RETRY_DELAY)


@dataclass(frozen=True)
class RetryPolicy:
    """Retry policy of a request.

    Attributes:
        max_attempts: Maximum number of retries after the first attempt.
            The total number of attempts is at most ``max_attempts + 1``.
        delay: Function mapping the 1-indexed retry number to the delay
            in seconds to wait before that retry. Defaults to a fixed
            one second delay.

    Raises:
        ConfigurationError: If ``max_attempts`` is negative.

    Example:
        ```pycon
        >>> from resthandler.backoff import ExponentialBackoff
        >>> from resthandler.retry import RetryPolicy
        >>> policy = RetryPolicy(max_attempts=3, delay=ExponentialBackoff(base_delay=0.5))
        >>> policy.delay(1)
        1.0

        ```
    """

    max_attempts: int
    delay: Callable[[int], float] = field(default_factory=_default_delay)

    def __post_init__(self) -> None:
        validate_max_attempts(self.max_attempts)


@dataclass(frozen=True)
class CallbackConfig:
    """Observer callbacks of a request.

    There is at most one callback of each kind. Registering a new one on
    a ``RestRequest`` replaces the previous one.

    Attributes:
        on_success: Called with the result when a 2xx response is received.
        on_failure: Called with the result when an attempt receives an
            unsuccessful status code, times out, hits a transport error,
            or when the execution is cancelled.
        on_exception: Called with the exception when an attempt raises
            an unexpected exception.
        on_retry: Called with the result, the 1-indexed retry number and
            the elapsed seconds before every retry.
    """

    on_success: ResultCallback | None = None
    on_failure: ResultCallback | None = None
    on_exception: ExceptionCallback | None = None
    on_retry: RetryCallback | None = None
