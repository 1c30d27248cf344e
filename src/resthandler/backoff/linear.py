r"""Linear backoff strategy."""

from __future__ import annotations

__all__ = ["LinearBackoff"]

from resthandler.backoff.base import BaseBackoffStrategy
from resthandler.core.validation import validate_max_delay, validate_non_negative


class LinearBackoff(BaseBackoffStrategy):
    """Linear backoff strategy.

    Calculates delay as: increment * attempt, with optional max_delay cap.

    Args:
        increment: The delay increment in seconds added at each retry.
        max_delay: Optional maximum delay cap in seconds. ``None`` means
            the delay is not capped.

    Raises:
        ConfigurationError: If ``increment`` or ``max_delay`` is negative.

    Example:
        ```pycon
        >>> from resthandler.backoff import LinearBackoff
        >>> backoff = LinearBackoff(increment=1.0, max_delay=3.0)
        >>> backoff.calculate(1)
        1.0
        >>> backoff.calculate(2)
        2.0
        >>> backoff.calculate(5)  # Would be 5.0, but capped
        3.0

        ```
    """

    def __init__(self, increment: float, max_delay: float | None = None) -> None:
        validate_non_negative("increment", increment)
        validate_max_delay(max_delay)
        self.increment = increment
        self.max_delay = max_delay

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(increment={self.increment}, "
            f"max_delay={self.max_delay})"
        )

    def calculate(self, attempt: int) -> float:
        delay = self.increment * attempt
        if self.max_delay is not None:
            delay = min(delay, self.max_delay)
        return delay
