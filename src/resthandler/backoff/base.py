r"""Abstract base class for backoff strategies."""

from __future__ import annotations

__all__ = ["BaseBackoffStrategy"]

from abc import ABC, abstractmethod


class BaseBackoffStrategy(ABC):
    """Abstract base class for backoff strategies.

    A backoff strategy determines how long to wait before a retry based
    on the retry index. Strategies are stateless and can be called
    directly, so they can be used wherever a delay function is expected.
    """

    def __call__(self, attempt: int) -> float:
        return self.calculate(attempt)

    @abstractmethod
    def calculate(self, attempt: int) -> float:
        """Calculate the backoff delay for a given retry attempt.

        Args:
            attempt: The retry index (1-indexed). For example,
                attempt=1 is the first retry, attempt=2 is the second retry, etc.

        Returns:
            The delay in seconds to wait before the retry.
        """
