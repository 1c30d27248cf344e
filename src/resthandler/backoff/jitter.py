r"""Jitter backoff strategy."""

from __future__ import annotations

__all__ = ["JitterBackoff"]

import random

from resthandler.backoff.base import BaseBackoffStrategy
from resthandler.core.validation import validate_non_negative


class JitterBackoff(BaseBackoffStrategy):
    """Randomized backoff strategy.

    Every call samples a new delay uniformly in ``[0, max_delay]``,
    independently of the attempt number. The delays are not
    reproducible.

    Args:
        max_delay: The maximum delay in seconds.

    Raises:
        ConfigurationError: If ``max_delay`` is negative.

    Example:
        ```pycon
        >>> from resthandler.backoff import JitterBackoff
        >>> backoff = JitterBackoff(max_delay=2.0)
        >>> 0.0 <= backoff.calculate(1) <= 2.0
        True

        ```
    """

    def __init__(self, max_delay: float) -> None:
        validate_non_negative("max_delay", max_delay)
        self.max_delay = max_delay

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(max_delay={self.max_delay})"

    def calculate(self, attempt: int) -> float:  # noqa: ARG002
        return random.uniform(0, self.max_delay)  # noqa: S311
