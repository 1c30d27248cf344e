r"""Parameter validation utilities.

This module provides the validation functions used when requests,
backoff strategies and default configurations are configured, so that
invalid values are rejected at configuration time rather than while a
request is being executed.
"""

from __future__ import annotations

__all__ = [
    "validate_factor",
    "validate_max_attempts",
    "validate_max_delay",
    "validate_non_negative",
    "validate_timeout",
]

from resthandler.exceptions import ConfigurationError


def validate_non_negative(name: str, value: float) -> None:
    """Validate that a delay-like value is non-negative.

    Args:
        name: The parameter name, used in the error message.
        value: The value to validate.

    Raises:
        ConfigurationError: If ``value`` is negative.

    Example:
        ```pycon
        >>> from resthandler.core.validation import validate_non_negative
        >>> validate_non_negative("delay", 1.5)
        >>> validate_non_negative("delay", -1.0)
        Traceback (most recent call last):
            ...
        resthandler.exceptions.ConfigurationError: delay must be non-negative, got -1.0

        ```
    """
    if value < 0:
        msg = f"{name} must be non-negative, got {value}"
        raise ConfigurationError(msg)


def validate_max_delay(max_delay: float | None) -> None:
    """Validate an optional maximum delay cap.

    Args:
        max_delay: The maximum delay in seconds, or ``None`` for no cap.

    Raises:
        ConfigurationError: If ``max_delay`` is negative.
    """
    if max_delay is not None:
        validate_non_negative("max_delay", max_delay)


def validate_factor(factor: float) -> None:
    """Validate an exponential growth factor.

    Args:
        factor: The growth factor. Must be >= 1.

    Raises:
        ConfigurationError: If ``factor`` is lower than 1.
    """
    if factor < 1.0:
        msg = f"factor must be >= 1, got {factor}"
        raise ConfigurationError(msg)


def validate_max_attempts(max_attempts: int) -> None:
    """Validate the number of retry attempts.

    Args:
        max_attempts: Maximum number of retries after the first attempt.
            Must be >= 0. A value of 0 means a single attempt.

    Raises:
        ConfigurationError: If ``max_attempts`` is negative.

    Example:
        ```pycon
        >>> from resthandler.core.validation import validate_max_attempts
        >>> validate_max_attempts(3)
        >>> validate_max_attempts(-1)  # doctest: +SKIP

        ```
    """
    if max_attempts < 0:
        msg = f"max_attempts must be >= 0, got {max_attempts}"
        raise ConfigurationError(msg)


def validate_timeout(timeout: float) -> None:
    """Validate a timeout.

    Args:
        timeout: Maximum seconds allowed for one attempt. Must be > 0.

    Raises:
        ConfigurationError: If ``timeout`` is <= 0.

    Example:
        ```pycon
        >>> from resthandler.core.validation import validate_timeout
        >>> validate_timeout(10.0)
        >>> validate_timeout(0)
        Traceback (most recent call last):
            ...
        resthandler.exceptions.ConfigurationError: timeout must be > 0, got 0

        ```
    """
    if timeout <= 0:
        msg = f"timeout must be > 0, got {timeout}"
        raise ConfigurationError(msg)
