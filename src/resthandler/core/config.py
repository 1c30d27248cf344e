r"""Default values and the shared default configuration.

This module provides the configuration constants used by the request
builder and the execution engine, and the ``DefaultConfig`` object that
seeds the base address, headers, authorization and timeout of every
request built through a ``RestClient`` or ``AsyncRestClient``.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_RETRY_DELAY",
    "GENERIC_ERROR_STATUS",
    "JSON_MEDIA_TYPE",
    "REQUEST_TIMEOUT_STATUS",
    "DefaultConfig",
]

from typing import TYPE_CHECKING, Any

from resthandler.core.validation import validate_timeout
from resthandler.exceptions import ConfigurationError
from resthandler.utils.headers import normalize_headers

if TYPE_CHECKING:
    from collections.abc import Iterable

# Delay in seconds between attempts when retries are enabled without
# an explicit delay function
DEFAULT_RETRY_DELAY = 1.0

# Status code reported when an attempt exceeds its timeout
REQUEST_TIMEOUT_STATUS = 408

# Status code reported for transport errors that carry no status code,
# and for unexpected errors
GENERIC_ERROR_STATUS = 500

# Media type of request bodies serialized to JSON
JSON_MEDIA_TYPE = "application/json"


class DefaultConfig:
    r"""Default settings applied to the requests built by a client.

    The configuration is read when a request is built, never while it is
    executed. Per-request settings always take precedence: the request
    headers are appended after the default headers, and the request
    authorization and timeout replace the default ones.

    The base address must be configured before any request is built.
    The first request built by a client seals the configuration, after
    which ``set_base_address`` and ``remove_base_address`` raise a
    ``ConfigurationError``. Headers, authorization and timeout can still
    be changed and only affect the requests built afterwards.

    Args:
        base_address: Optional base address that relative request URLs
            are resolved against.
        headers: Optional default headers, given as a mapping, an
            iterable of ``(name, value)`` pairs, or an object whose public
            attributes are used as headers.
        authorization: Optional default ``(scheme, credential)`` pair.
        timeout: Optional default per-attempt timeout in seconds.

    Example:
        ```pycon
        >>> from resthandler.core.config import DefaultConfig
        >>> config = DefaultConfig(base_address="https://api.example.com/v1/")
        >>> config.add_header("X-Client", "resthandler")
        >>> config.add_authorization("Bearer", "token")
        >>> config.headers
        (('X-Client', 'resthandler'),)
        >>> config.authorization
        ('Bearer', 'token')
        >>> config.seal()
        >>> config.set_base_address("https://other.example.com/")
        Traceback (most recent call last):
            ...
        resthandler.exceptions.ConfigurationError: the base address cannot be changed once requests have been built

        ```
    """

    def __init__(
        self,
        base_address: str | None = None,
        headers: Any = None,
        authorization: tuple[str, str] | None = None,
        timeout: float | None = None,
    ) -> None:
        self._base_address = base_address
        self._headers: list[tuple[str, str]] = normalize_headers(headers)
        self._authorization = authorization
        if timeout is not None:
            validate_timeout(timeout)
        self._timeout = timeout
        self._sealed = False

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(base_address={self._base_address!r}, "
            f"headers={len(self._headers)}, authorization={self._authorization is not None}, "
            f"timeout={self._timeout}, sealed={self._sealed})"
        )

    @property
    def base_address(self) -> str | None:
        return self._base_address

    @property
    def headers(self) -> tuple[tuple[str, str], ...]:
        return tuple(self._headers)

    @property
    def authorization(self) -> tuple[str, str] | None:
        return self._authorization

    @property
    def timeout(self) -> float | None:
        return self._timeout

    @property
    def sealed(self) -> bool:
        return self._sealed

    def seal(self) -> None:
        """Prevent any further change of the base address."""
        self._sealed = True

    def set_base_address(self, base_address: str) -> None:
        """Set the address relative request URLs are resolved against.

        Raises:
            ConfigurationError: If the configuration is sealed.
        """
        self._check_not_sealed()
        self._base_address = base_address

    def remove_base_address(self) -> None:
        """Remove the base address.

        Raises:
            ConfigurationError: If the configuration is sealed.
        """
        self._check_not_sealed()
        self._base_address = None

    def add_header(self, name: str, value: str) -> None:
        self._headers.append((name, value))

    def add_headers(self, headers: Any) -> None:
        self._headers.extend(normalize_headers(headers))

    def remove_header(self, name: str) -> None:
        """Remove every default header called ``name`` (case
        insensitive)."""
        key = name.lower()
        self._headers = [(k, v) for k, v in self._headers if k.lower() != key]

    def remove_headers(self, names: Iterable[str]) -> None:
        for name in names:
            self.remove_header(name)

    def clear_headers(self) -> None:
        self._headers.clear()

    def add_authorization(self, scheme: str, credential: str) -> None:
        self._authorization = (scheme, credential)

    def remove_authorization(self) -> None:
        self._authorization = None

    def set_timeout(self, timeout: float) -> None:
        """Set the default per-attempt timeout in seconds.

        Raises:
            ConfigurationError: If ``timeout`` is <= 0.
        """
        validate_timeout(timeout)
        self._timeout = timeout

    def remove_timeout(self) -> None:
        self._timeout = None

    def _check_not_sealed(self) -> None:
        if self._sealed:
            msg = "the base address cannot be changed once requests have been built"
            raise ConfigurationError(msg)
