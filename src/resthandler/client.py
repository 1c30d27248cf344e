r"""Synchronous context manager client for REST requests.

This module provides a context manager-based client that creates
request builders seeded from a shared ``DefaultConfig`` and bound to
an ``httpx.Client``.
"""

from __future__ import annotations

__all__ = ["RestClient"]

from typing import TYPE_CHECKING

import httpx

from resthandler.core.client_logic import create_request
from resthandler.core.config import DefaultConfig

if TYPE_CHECKING:
    from types import TracebackType
    from typing import Self

    from resthandler.request import RestRequest


class RestClient:
    r"""Synchronous context manager for REST requests.

    Two usage patterns are supported:

    **External lifecycle**: the ``httpx.Client`` is created and managed
    by an outer ``with`` block and passed to ``RestClient``, which does
    *not* close it on exit.

    .. code-block:: python

        import httpx
        from resthandler import DefaultConfig, RestClient

        with httpx.Client() as http_client:
            with RestClient(client=http_client) as client:
                result = client.get("https://api.example.com/data").send()
        # http_client is closed here by the outer ``with`` block

    **Managed lifecycle**: no ``httpx.Client`` is passed. ``RestClient``
    creates one and closes it when the ``with`` block exits.

    .. code-block:: python

        from resthandler import DefaultConfig, RestClient

        config = DefaultConfig(base_address="https://api.example.com/v1/")
        with RestClient(config=config) as client:
            result = client.get("users/42").set_retries(3).send()

    Args:
        config: Optional default configuration applied to every request
            created by the client. If ``None``, an empty configuration is
            used.
        client: Optional ``httpx.Client`` used to send the requests. If
            ``None``, a new client is created.

    Example:
        ```pycon
        >>> from resthandler import DefaultConfig, RestClient
        >>> config = DefaultConfig(base_address="https://api.example.com/v1/")
        >>> with RestClient(config=config) as client:
        ...     client.get("users/42")
        ...
        RestRequest(method='GET', url='https://api.example.com/v1/users/42')

        ```
    """

    def __init__(
        self,
        *,
        config: DefaultConfig | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._config: DefaultConfig = config or DefaultConfig()
        self._client: httpx.Client = client or httpx.Client()
        self._close_client = client is None

    def __enter__(self) -> Self:
        """Enter the context manager.

        Returns:
            The RestClient instance.
        """
        if self._close_client:
            self._client.__enter__()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._close_client:
            self._client.__exit__(exc_type, exc_val, exc_tb)
            self._close_client = False

    @property
    def config(self) -> DefaultConfig:
        return self._config

    def request(self, method: str, url: str | httpx.URL) -> RestRequest:
        r"""Create a request builder bound to this client.

        The first call seals the configuration, so the base address
        cannot be changed afterwards.

        Args:
            method: The HTTP method.
            url: The request URL, resolved against the base address.

        Returns:
            The request builder, seeded with the default headers,
            authorization and timeout.
        """
        return create_request(self._config, method, url, self._client)

    def get(self, url: str | httpx.URL) -> RestRequest:
        return self.request("GET", url)

    def post(self, url: str | httpx.URL) -> RestRequest:
        return self.request("POST", url)

    def put(self, url: str | httpx.URL) -> RestRequest:
        return self.request("PUT", url)

    def delete(self, url: str | httpx.URL) -> RestRequest:
        return self.request("DELETE", url)
