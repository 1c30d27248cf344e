r"""Exception types raised by resthandler.

Only configuration mistakes are raised to the caller. Everything that
goes wrong while a request is being executed is folded into the
returned ``RequestResult`` instead.
"""

from __future__ import annotations

__all__ = ["ConfigurationError", "DecodeError", "HttpRequestError"]

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx


class ConfigurationError(ValueError):
    """Raised when a request, a backoff strategy or the default
    configuration is configured with an invalid value.

    Example:
        ```pycon
        >>> from resthandler.exceptions import ConfigurationError
        >>> raise ConfigurationError("delay must be non-negative, got -1")
        Traceback (most recent call last):
            ...
        resthandler.exceptions.ConfigurationError: delay must be non-negative, got -1

        ```
    """


class DecodeError(ValueError):
    """Raised when a payload cannot be decoded into the requested
    type."""


class HttpRequestError(RuntimeError):
    """Recognized transport or protocol error.

    The execution engine treats this exception as an anticipated network
    failure: the attempt is marked as failed with ``status_code`` (or a
    generic server error code when it is ``None``) and retried if the
    retry budget allows it.

    Args:
        method: The HTTP method of the request.
        url: The URL of the request.
        message: A human readable description of the error.
        status_code: The HTTP status code associated with the error, if any.
        response: The response that triggered the error, if any.
        cause: The underlying exception, if any.

    Example:
        ```pycon
        >>> from resthandler.exceptions import HttpRequestError
        >>> error = HttpRequestError(
        ...     method="GET",
        ...     url="https://api.example.com/data",
        ...     message="upstream refused the request",
        ...     status_code=502,
        ... )
        >>> error.status_code
        502

        ```
    """

    def __init__(
        self,
        method: str,
        url: str,
        message: str,
        status_code: int | None = None,
        response: httpx.Response | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.method = method
        self.url = url
        self.status_code = status_code
        self.response = response
        self.__cause__ = cause

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(method={self.method!r}, url={self.url!r}, "
            f"status_code={self.status_code})"
        )
