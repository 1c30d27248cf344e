r"""Shorthand constructors for the backoff strategies.

Example:
    ```pycon
    >>> from resthandler.backoff import exponential, fixed, jitter, linear
    >>> fixed(1.0)(3)
    1.0
    >>> linear(1.0, max_delay=3.0)(2)
    2.0
    >>> exponential(base_delay=1.0, max_delay=5.0)(3)
    5.0

    ```
"""

from __future__ import annotations

__all__ = ["exponential", "fixed", "jitter", "linear"]

from resthandler.backoff.exponential import ExponentialBackoff
from resthandler.backoff.fixed import FixedBackoff
from resthandler.backoff.jitter import JitterBackoff
from resthandler.backoff.linear import LinearBackoff


def fixed(delay: float) -> FixedBackoff:
    r"""Return a strategy waiting ``delay`` seconds before every retry."""
    return FixedBackoff(delay=delay)


def linear(increment: float, max_delay: float | None = None) -> LinearBackoff:
    r"""Return a strategy waiting ``increment * attempt`` seconds, capped
    at ``max_delay``."""
    return LinearBackoff(increment=increment, max_delay=max_delay)


def exponential(
    base_delay: float = 1.0, max_delay: float | None = None, factor: float = 2.0
) -> ExponentialBackoff:
    r"""Return a strategy waiting ``base_delay * factor ** attempt``
    seconds, capped at ``max_delay``."""
    return ExponentialBackoff(base_delay=base_delay, max_delay=max_delay, factor=factor)


def jitter(max_delay: float) -> JitterBackoff:
    r"""Return a strategy waiting a random delay in ``[0, max_delay]``."""
    return JitterBackoff(max_delay=max_delay)
