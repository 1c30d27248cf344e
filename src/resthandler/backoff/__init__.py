r"""Backoff strategies for retry delays.

A delay function maps a 1-based retry index to a non-negative delay in
seconds. Any ``Callable[[int], float]`` can be used; this package
provides fixed, linear, exponential and jitter strategies.
"""

from __future__ import annotations

__all__ = [
    "BaseBackoffStrategy",
    "ExponentialBackoff",
    "FixedBackoff",
    "JitterBackoff",
    "LinearBackoff",
    "exponential",
    "fixed",
    "jitter",
    "linear",
]

from resthandler.backoff.base import BaseBackoffStrategy
from resthandler.backoff.exponential import ExponentialBackoff
from resthandler.backoff.factory import exponential, fixed, jitter, linear
from resthandler.backoff.fixed import FixedBackoff
from resthandler.backoff.jitter import JitterBackoff
from resthandler.backoff.linear import LinearBackoff
