r"""Fixed backoff strategy."""

from __future__ import annotations

__all__ = ["FixedBackoff"]

from resthandler.backoff.base import BaseBackoffStrategy
from resthandler.core.validation import validate_non_negative


class FixedBackoff(BaseBackoffStrategy):
    """Fixed backoff strategy.

    Returns the same delay for every retry attempt, regardless of the
    attempt number. This is the strategy used by
    ``RestRequest.set_retries`` when no delay function is given.

    Args:
        delay: The delay in seconds to use for all retry attempts (default: 1.0).

    Raises:
        ConfigurationError: If ``delay`` is negative.

    Example:
        ```pycon
        >>> from resthandler.backoff import FixedBackoff
        >>> backoff = FixedBackoff(delay=2.5)
        >>> backoff.calculate(1)
        2.5
        >>> backoff(10)
        2.5

        ```
    """

    def __init__(self, delay: float = 1.0) -> None:
        validate_non_negative("delay", delay)
        self.delay = delay

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(delay={self.delay})"

    def calculate(self, attempt: int) -> float:  # noqa: ARG002
        return self.delay
