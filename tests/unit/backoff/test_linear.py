r"""Unit tests for LinearBackoff strategy."""

from __future__ import annotations

import pytest

from resthandler.backoff.linear import LinearBackoff
from resthandler.exceptions import ConfigurationError


def test_linear_backoff_basic() -> None:
    """Test basic linear backoff calculation."""
    backoff = LinearBackoff(increment=1.0)
    assert backoff.calculate(1) == 1.0
    assert backoff.calculate(2) == 2.0
    assert backoff.calculate(3) == 3.0
    assert backoff.calculate(10) == 10.0


def test_linear_backoff_with_max_delay() -> None:
    """Test linear backoff with max_delay cap."""
    backoff = LinearBackoff(increment=1.0, max_delay=3.0)
    assert backoff(1) == 1.0
    assert backoff(2) == 2.0
    assert backoff(3) == 3.0
    assert backoff(4) == 3.0  # Would be 4.0, but capped
    assert backoff(50) == 3.0


def test_linear_backoff_default_max_delay() -> None:
    """Test that there is no cap by default."""
    backoff = LinearBackoff(increment=2.0)
    assert backoff.max_delay is None
    assert backoff(1000) == 2000.0


def test_linear_backoff_zero_increment() -> None:
    """Test linear backoff with zero increment."""
    backoff = LinearBackoff(increment=0.0)
    assert backoff(1) == 0.0
    assert backoff(5) == 0.0


def test_linear_backoff_negative_increment() -> None:
    """Test that a negative increment raises ConfigurationError."""
    with pytest.raises(ConfigurationError, match=r"increment must be non-negative, got -1.0"):
        LinearBackoff(increment=-1.0)


def test_linear_backoff_negative_max_delay() -> None:
    """Test that a negative max_delay raises ConfigurationError."""
    with pytest.raises(ConfigurationError, match=r"max_delay must be non-negative, got -5.0"):
        LinearBackoff(increment=1.0, max_delay=-5.0)


def test_linear_backoff_repr() -> None:
    """Test LinearBackoff string representation."""
    assert repr(LinearBackoff(increment=0.5, max_delay=3.0)) == (
        "LinearBackoff(increment=0.5, max_delay=3.0)"
    )
