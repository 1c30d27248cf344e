from __future__ import annotations

import pytest

from resthandler.core import (
    validate_factor,
    validate_max_attempts,
    validate_max_delay,
    validate_non_negative,
    validate_timeout,
)
from resthandler.exceptions import ConfigurationError

###########################################
#     Tests for validate_non_negative     #
###########################################


@pytest.mark.parametrize("value", [0, 0.0, 0.1, 1, 100.0])
def test_validate_non_negative_accepts_valid_values(value: float) -> None:
    validate_non_negative("delay", value)


def test_validate_non_negative_rejects_negative() -> None:
    with pytest.raises(ConfigurationError, match=r"delay must be non-negative, got -0.5"):
        validate_non_negative("delay", -0.5)


########################################
#     Tests for validate_max_delay     #
########################################


@pytest.mark.parametrize("max_delay", [None, 0.0, 5.0])
def test_validate_max_delay_accepts_valid_values(max_delay: float | None) -> None:
    validate_max_delay(max_delay)


def test_validate_max_delay_rejects_negative() -> None:
    with pytest.raises(ConfigurationError, match=r"max_delay must be non-negative, got -1"):
        validate_max_delay(-1)


#####################################
#     Tests for validate_factor     #
#####################################


@pytest.mark.parametrize("factor", [1, 1.5, 2.0, 10.0])
def test_validate_factor_accepts_valid_values(factor: float) -> None:
    validate_factor(factor)


@pytest.mark.parametrize("factor", [0.99, 0.0, -2.0])
def test_validate_factor_rejects_values_lower_than_one(factor: float) -> None:
    with pytest.raises(ConfigurationError, match=r"factor must be >= 1"):
        validate_factor(factor)


###########################################
#     Tests for validate_max_attempts     #
###########################################


@pytest.mark.parametrize("max_attempts", [0, 1, 3, 100])
def test_validate_max_attempts_accepts_valid_values(max_attempts: int) -> None:
    validate_max_attempts(max_attempts)


def test_validate_max_attempts_rejects_negative() -> None:
    with pytest.raises(ConfigurationError, match=r"max_attempts must be >= 0, got -1"):
        validate_max_attempts(-1)


######################################
#     Tests for validate_timeout     #
######################################


@pytest.mark.parametrize("timeout", [0.1, 1.0, 10.0, 30.0, 100])
def test_validate_timeout_accepts_valid_values(timeout: float) -> None:
    """Test that validate_timeout accepts valid timeout values."""
    validate_timeout(timeout)


def test_validate_timeout_rejects_zero() -> None:
    """Test that validate_timeout rejects zero timeout."""
    with pytest.raises(ConfigurationError, match=r"timeout must be > 0, got 0"):
        validate_timeout(0)


def test_validate_timeout_rejects_negative() -> None:
    """Test that validate_timeout rejects negative timeout."""
    with pytest.raises(ValueError, match=r"timeout must be > 0, got -1.0"):
        validate_timeout(-1.0)
