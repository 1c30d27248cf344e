r"""Fluent builder for REST requests.

This module provides the ``RestRequest`` builder used to configure a
request with chained calls, the immutable ``RequestDescriptor`` snapshot
that the execution engine consumes, and the ``get``, ``post``, ``put``
and ``delete`` factory functions.

Example:
    ```pycon
    >>> from resthandler import request
    >>> builder = (
    ...     request.post("https://api.example.com/items")
    ...     .add_header("X-Trace", "abc")
    ...     .with_content({"name": "test"})
    ...     .set_retries(2)
    ... )
    >>> descriptor = builder.build()
    >>> descriptor.method, descriptor.content
    ('POST', b'{"name":"test"}')

    ```
"""

from __future__ import annotations

__all__ = ["RequestDescriptor", "RestRequest", "delete", "get", "post", "put"]

import dataclasses
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import httpx

from resthandler.core.config import JSON_MEDIA_TYPE
from resthandler.core.validation import validate_timeout
from resthandler.exceptions import ConfigurationError
from resthandler.retry.config import CallbackConfig, RetryPolicy
from resthandler.retry.executor import RequestExecutor
from resthandler.retry.executor_async import AsyncRequestExecutor
from resthandler.utils.codec import serialize
from resthandler.utils.headers import has_header, normalize_headers

if TYPE_CHECKING:
    import asyncio
    import threading
    from collections.abc import Callable
    from typing import Self

    from resthandler.result import RequestResult
    from resthandler.retry.config import ExceptionCallback, ResultCallback, RetryCallback

logger: logging.Logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RequestDescriptor:
    """Immutable description of one logical request.

    A descriptor is produced by ``RestRequest.build`` and can be executed
    any number of times: the body is kept as bytes and a new wire
    request is created for every attempt.

    Attributes:
        method: The HTTP method, in upper case.
        url: The absolute URL, or a URL relative to the base URL of the
            ``httpx`` client used to send the request.
        headers: The request headers as ``(name, value)`` pairs, in
            insertion order. Duplicated names are kept.
        content: The request body, if any.
        media_type: The media type of the body.
        authorization: Optional ``(scheme, credential)`` pair rendered
            as the ``Authorization`` header when the request is sent.
        timeout: Optional per-attempt timeout in seconds.
        retry_policy: Optional retry policy. ``None`` means a single
            attempt.
        callbacks: The observer callbacks.
    """

    method: str
    url: str
    headers: tuple[tuple[str, str], ...] = ()
    content: bytes | None = None
    media_type: str = JSON_MEDIA_TYPE
    authorization: tuple[str, str] | None = None
    timeout: float | None = None
    retry_policy: RetryPolicy | None = None
    callbacks: CallbackConfig = field(default_factory=CallbackConfig)


class RestRequest:
    r"""Fluent builder of a REST request.

    Every configuration call returns the builder itself so that calls
    can be chained, and none of them performs any I/O. The terminal
    calls ``send`` and ``send_async`` take an immutable snapshot with
    ``build`` before executing it, so changing the builder afterwards
    never affects an execution in flight.

    Args:
        method: The HTTP method.
        url: The target URL.
        client: Optional ``httpx.Client`` or ``httpx.AsyncClient`` the
            request is bound to. It is used by ``send`` or
            ``send_async`` when no client is passed explicitly.
        default_authorization: Optional ``(scheme, credential)`` pair
            used when neither ``with_authorization`` nor ``add_header``
            sets the ``Authorization`` header of the request.

    Example:
        ```pycon
        >>> from resthandler import RestRequest
        >>> from resthandler.backoff import LinearBackoff
        >>> builder = (
        ...     RestRequest.get("https://api.example.com/data")
        ...     .with_authorization("Bearer", "token")
        ...     .set_timeout(5.0)
        ...     .set_retries(3, LinearBackoff(increment=0.5))
        ...     .on_success(lambda result: print(result.status_code))
        ... )
        >>> result = builder.send()  # doctest: +SKIP

        ```
    """

    def __init__(
        self,
        method: str,
        url: str | httpx.URL,
        client: httpx.Client | httpx.AsyncClient | None = None,
        default_authorization: tuple[str, str] | None = None,
    ) -> None:
        self._method = method.upper()
        self._url = str(url)
        self._client = client
        self._headers: list[tuple[str, str]] = []
        self._content: bytes | None = None
        self._media_type = JSON_MEDIA_TYPE
        self._authorization: tuple[str, str] | None = None
        self._default_authorization = default_authorization
        self._timeout: float | None = None
        self._retry_policy: RetryPolicy | None = None
        self._callbacks = CallbackConfig()

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(method={self._method!r}, url={self._url!r})"

    @classmethod
    def get(cls, url: str | httpx.URL) -> Self:
        return cls("GET", url)

    @classmethod
    def post(cls, url: str | httpx.URL) -> Self:
        return cls("POST", url)

    @classmethod
    def put(cls, url: str | httpx.URL) -> Self:
        return cls("PUT", url)

    @classmethod
    def delete(cls, url: str | httpx.URL) -> Self:
        return cls("DELETE", url)

    @property
    def method(self) -> str:
        return self._method

    @property
    def url(self) -> str:
        return self._url

    def add_header(self, name: str, value: str) -> Self:
        """Append a header. Existing headers with the same name are
        kept."""
        self._headers.append((name, value))
        return self

    def add_headers(self, headers: Any) -> Self:
        """Append several headers.

        Args:
            headers: A mapping, an iterable of ``(name, value)`` pairs, or
                an object whose public attributes are used as headers.
                ``None`` is ignored.

        Returns:
            The builder.
        """
        self._headers.extend(normalize_headers(headers))
        return self

    def with_content(self, content: Any, media_type: str | None = None) -> Self:
        """Set the request body, replacing any previous body.

        ``bytes`` and ``str`` values are sent as they are, ``str`` values
        being encoded in UTF-8. Any other value is serialized to JSON.

        Args:
            content: The body.
            media_type: The media type of the body. Defaults to
                ``application/json``.

        Returns:
            The builder.

        Example:
            ```pycon
            >>> from resthandler import RestRequest
            >>> builder = RestRequest.put("https://api.example.com/notes/1")
            >>> descriptor = builder.with_content("hello", media_type="text/plain").build()
            >>> descriptor.content, descriptor.media_type
            (b'hello', 'text/plain')

            ```
        """
        if isinstance(content, bytes):
            self._content = content
        elif isinstance(content, str):
            self._content = content.encode("utf-8")
        else:
            self._content = serialize(content)
        self._media_type = media_type or JSON_MEDIA_TYPE
        return self

    def with_authorization(self, scheme: str, credential: str) -> Self:
        """Set the authorization of this request.

        The header is rendered as ``"<scheme> <credential>"`` and replaces
        both the default authorization and any ``Authorization`` header
        added with ``add_header``.

        Example:
            ```pycon
            >>> from resthandler import RestRequest
            >>> builder = RestRequest.get("https://api.example.com/me")
            >>> builder.with_authorization("Basic", "dXNlcjpwYXNz").build().authorization
            ('Basic', 'dXNlcjpwYXNz')

            ```
        """
        self._authorization = (scheme, credential)
        return self

    def without_authorization(self) -> Self:
        """Send this request without ``Authorization`` header set by the
        builder."""
        self._authorization = None
        self._default_authorization = None
        return self

    def set_timeout(self, timeout: float) -> Self:
        """Set the per-attempt timeout in seconds.

        Raises:
            ConfigurationError: If ``timeout`` is <= 0.
        """
        validate_timeout(timeout)
        self._timeout = timeout
        return self

    def set_retries(
        self, max_attempts: int, delay: Callable[[int], float] | None = None
    ) -> Self:
        """Set the retry policy.

        Args:
            max_attempts: The maximum number of retries after the first
                attempt.
            delay: Optional function mapping the 1-indexed retry number to
                the delay in seconds. Defaults to a fixed one second delay.

        Returns:
            The builder.

        Raises:
            ConfigurationError: If ``max_attempts`` is negative.
        """
        if delay is None:
            self._retry_policy = RetryPolicy(max_attempts=max_attempts)
        else:
            self._retry_policy = RetryPolicy(max_attempts=max_attempts, delay=delay)
        return self

    def on_success(self, callback: ResultCallback) -> Self:
        self._callbacks = dataclasses.replace(self._callbacks, on_success=callback)
        return self

    def on_fail(self, callback: ResultCallback) -> Self:
        self._callbacks = dataclasses.replace(self._callbacks, on_failure=callback)
        return self

    def on_exception(self, callback: ExceptionCallback) -> Self:
        self._callbacks = dataclasses.replace(self._callbacks, on_exception=callback)
        return self

    def on_retry(self, callback: RetryCallback) -> Self:
        self._callbacks = dataclasses.replace(self._callbacks, on_retry=callback)
        return self

    def build(self) -> RequestDescriptor:
        """Take an immutable snapshot of the current configuration."""
        authorization = self._authorization
        if authorization is None and not has_header(self._headers, "Authorization"):
            authorization = self._default_authorization
        return RequestDescriptor(
            method=self._method,
            url=self._url,
            headers=tuple(self._headers),
            content=self._content,
            media_type=self._media_type,
            authorization=authorization,
            timeout=self._timeout,
            retry_policy=self._retry_policy,
            callbacks=self._callbacks,
        )

    def send(
        self, client: httpx.Client | None = None, cancel_event: threading.Event | None = None
    ) -> RequestResult:
        """Send the request and wait for the final result.

        Args:
            client: Optional client used to send the request. Defaults to
                the client the builder is bound to. If there is none, a
                transient client is created and closed afterwards.
            cancel_event: Optional event the caller can set from another
                thread to abort the whole retry sequence.

        Returns:
            The result of the execution.

        Raises:
            ConfigurationError: If the client is not an ``httpx.Client``.
        """
        descriptor = self.build()
        client = self._client if client is None else client
        if client is None:
            logger.debug(f"Creating a transient client for {descriptor.method} {descriptor.url}")
            with httpx.Client() as transient:
                return RequestExecutor(descriptor).execute(transient, cancel_event)
        if not isinstance(client, httpx.Client):
            msg = f"send requires an httpx.Client, got {type(client).__qualname__}"
            raise ConfigurationError(msg)
        return RequestExecutor(descriptor).execute(client, cancel_event)

    async def send_async(
        self,
        client: httpx.AsyncClient | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> RequestResult:
        """Send the request asynchronously and return the final result.

        Args:
            client: Optional client used to send the request. Defaults to
                the client the builder is bound to. If there is none, a
                transient client is created and closed afterwards.
            cancel_event: Optional event the caller can set to abort the
                whole retry sequence.

        Returns:
            The result of the execution.

        Raises:
            ConfigurationError: If the client is not an
                ``httpx.AsyncClient``.
        """
        descriptor = self.build()
        client = self._client if client is None else client
        if client is None:
            logger.debug(f"Creating a transient client for {descriptor.method} {descriptor.url}")
            async with httpx.AsyncClient() as transient:
                return await AsyncRequestExecutor(descriptor).execute(transient, cancel_event)
        if not isinstance(client, httpx.AsyncClient):
            msg = f"send_async requires an httpx.AsyncClient, got {type(client).__qualname__}"
            raise ConfigurationError(msg)
        return await AsyncRequestExecutor(descriptor).execute(client, cancel_event)


def get(url: str | httpx.URL) -> RestRequest:
    r"""Create a builder for a GET request.

    Example:
        ```pycon
        >>> from resthandler import get
        >>> get("https://api.example.com/data")
        RestRequest(method='GET', url='https://api.example.com/data')

        ```
    """
    return RestRequest.get(url)


def post(url: str | httpx.URL) -> RestRequest:
    r"""Create a builder for a POST request."""
    return RestRequest.post(url)


def put(url: str | httpx.URL) -> RestRequest:
    r"""Create a builder for a PUT request."""
    return RestRequest.put(url)


def delete(url: str | httpx.URL) -> RestRequest:
    r"""Create a builder for a DELETE request."""
    return RestRequest.delete(url)
