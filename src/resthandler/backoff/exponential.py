r"""Exponential backoff strategy."""

from __future__ import annotations

__all__ = ["ExponentialBackoff"]

import math

from resthandler.backoff.base import BaseBackoffStrategy
from resthandler.core.validation import (
    validate_factor,
    validate_max_delay,
    validate_non_negative,
)


class ExponentialBackoff(BaseBackoffStrategy):
    """Exponential backoff strategy.

    Calculates delay as: base_delay * (factor ** attempt), with optional
    max_delay cap. Because retries are 1-indexed, the first retry already
    waits ``base_delay * factor``.

    Args:
        base_delay: The base delay in seconds (default: 1.0).
        max_delay: Optional maximum delay cap in seconds. ``None`` means
            the delay is not capped.
        factor: The growth factor (default: 2.0). Must be >= 1.

    Raises:
        ConfigurationError: If ``base_delay`` or ``max_delay`` is
            negative, or if ``factor`` is lower than 1.

    Example:
        ```pycon
        >>> from resthandler.backoff import ExponentialBackoff
        >>> backoff = ExponentialBackoff(base_delay=1.0, max_delay=5.0)
        >>> backoff.calculate(1)
        2.0
        >>> backoff.calculate(2)
        4.0
        >>> backoff.calculate(3)  # Would be 8.0, but capped
        5.0

        ```
    """

    def __init__(
        self, base_delay: float = 1.0, max_delay: float | None = None, factor: float = 2.0
    ) -> None:
        validate_non_negative("base_delay", base_delay)
        validate_max_delay(max_delay)
        validate_factor(factor)
        self.base_delay = base_delay
        self.max_delay = max_delay
        self.factor = factor

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(base_delay={self.base_delay}, "
            f"max_delay={self.max_delay}, factor={self.factor})"
        )

    def calculate(self, attempt: int) -> float:
        try:
            delay = self.base_delay * (self.factor**attempt)
        except OverflowError:
            delay = math.inf
        if self.max_delay is not None:
            delay = min(delay, self.max_delay)
        return delay
