r"""resthandler - Fluent REST request library with retries, timeouts and
callbacks.

This package provides a fluent builder to describe REST requests and an
execution engine that sends them with automatic retry logic. Built on
top of the httpx library, every execution ends with a single result
record instead of an exception, which makes the outcome of a request
easy to inspect, log and parse.

Key Features:
    - Fluent builder for GET, POST, PUT and DELETE requests
    - Per-attempt timeout and bounded retries with pluggable backoff
      functions (fixed, linear, exponential, jitter)
    - Single-slot observer callbacks for success, failure, unexpected
      exceptions and retries
    - Caller cancellation of a whole retry sequence
    - Default configuration shared by the requests of a client
    - Synchronous and asynchronous execution
    - Typed decoding of the response payload

Example:
    ```pycon
    >>> from resthandler import RestRequest, is_success, parse_as
    >>> from resthandler.backoff import exponential
    >>> result = (
    ...     RestRequest.get("https://api.example.com/items")
    ...     .set_timeout(5.0)
    ...     .set_retries(3, exponential(base_delay=0.5, max_delay=5.0))
    ...     .send()
    ... )  # doctest: +SKIP
    >>> if is_success(result):  # doctest: +SKIP
    ...     items = parse_as(result, list[dict])
    ...

    ```
"""

from __future__ import annotations

__all__ = [
    "AsyncRestClient",
    "ConfigurationError",
    "DecodeError",
    "DefaultConfig",
    "HttpRequestError",
    "RequestDescriptor",
    "RequestResult",
    "RequestState",
    "RestClient",
    "RestRequest",
    "__version__",
    "delete",
    "get",
    "is_success",
    "is_success_async",
    "parse_as",
    "parse_as_async",
    "post",
    "put",
    "raw_payload",
    "raw_payload_async",
]

from importlib.metadata import PackageNotFoundError, version

from resthandler.client import RestClient
from resthandler.client_async import AsyncRestClient
from resthandler.core.config import DefaultConfig
from resthandler.exceptions import ConfigurationError, DecodeError, HttpRequestError
from resthandler.request import RequestDescriptor, RestRequest, delete, get, post, put
from resthandler.result import RequestResult, RequestState
from resthandler.utils.result import (
    is_success,
    is_success_async,
    parse_as,
    parse_as_async,
    raw_payload,
    raw_payload_async,
)

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
