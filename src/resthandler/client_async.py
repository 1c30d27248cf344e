r"""Asynchronous context manager client for REST requests.

This module provides an async context manager-based client that
creates request builders seeded from a shared ``DefaultConfig`` and
bound to an ``httpx.AsyncClient``.
"""

from __future__ import annotations

__all__ = ["AsyncRestClient"]

from typing import TYPE_CHECKING

import httpx

from resthandler.core.client_logic import create_request
from resthandler.core.config import DefaultConfig

if TYPE_CHECKING:
    from types import TracebackType
    from typing import Self

    from resthandler.request import RestRequest


class AsyncRestClient:
    r"""Asynchronous context manager for REST requests.

    The requests created by this client are sent with ``send_async``.
    As with ``RestClient``, an ``httpx.AsyncClient`` passed by the caller
    is left open on exit, while a client created by ``AsyncRestClient``
    is closed on exit.

    Args:
        config: Optional default configuration applied to every request
            created by the client. If ``None``, an empty configuration is
            used.
        client: Optional ``httpx.AsyncClient`` used to send the requests.
            If ``None``, a new client is created.

    Example:
        ```pycon
        >>> import asyncio
        >>> from resthandler import AsyncRestClient, DefaultConfig
        >>> async def main():
        ...     config = DefaultConfig(base_address="https://api.example.com/v1/")
        ...     async with AsyncRestClient(config=config) as client:
        ...         return await client.get("users/42").set_retries(3).send_async()
        ...
        >>> result = asyncio.run(main())  # doctest: +SKIP

        ```
    """

    def __init__(
        self,
        *,
        config: DefaultConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config: DefaultConfig = config or DefaultConfig()
        self._client: httpx.AsyncClient = client or httpx.AsyncClient()
        self._close_client = client is None

    async def __aenter__(self) -> Self:
        """Enter the async context manager.

        Returns:
            The AsyncRestClient instance.
        """
        if self._close_client:
            await self._client.__aenter__()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._close_client:
            await self._client.__aexit__(exc_type, exc_val, exc_tb)
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
