r"""Core configuration shared by the request builder and the clients.

This package contains the configuration constants, the
``DefaultConfig`` object applied to requests built through a client, and
the validation functions used at configuration time.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_RETRY_DELAY",
    "GENERIC_ERROR_STATUS",
    "JSON_MEDIA_TYPE",
    "REQUEST_TIMEOUT_STATUS",
    "DefaultConfig",
    "validate_factor",
    "validate_max_attempts",
    "validate_max_delay",
    "validate_non_negative",
    "validate_timeout",
]

from resthandler.core.config import (
    DEFAULT_RETRY_DELAY,
    GENERIC_ERROR_STATUS,
    JSON_MEDIA_TYPE,
    REQUEST_TIMEOUT_STATUS,
    DefaultConfig,
)
from resthandler.core.validation import (
    validate_factor,
    validate_max_attempts,
    validate_max_delay,
    validate_non_negative,
    validate_timeout,
)
