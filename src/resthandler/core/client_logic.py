r"""Shared client logic for both sync and async REST clients.

This module provides the logic used by ``RestClient`` and
``AsyncRestClient`` to seed the requests they create from their
``DefaultConfig``.
"""

from __future__ import annotations

__all__ = ["create_request", "resolve_url"]

from typing import TYPE_CHECKING

import httpx

from resthandler.request import RestRequest

if TYPE_CHECKING:
    from resthandler.core.config import DefaultConfig


def resolve_url(base_address: str | None, url: str | httpx.URL) -> str:
    """Resolve a request URL against the base address.

    Args:
        base_address: The base address, if any.
        url: The request URL. Absolute URLs are returned unchanged.

    Returns:
        The resolved URL.

    Example:
        ```pycon
        >>> from resthandler.core.client_logic import resolve_url
        >>> resolve_url("https://api.example.com/v1/", "users/42")
        'https://api.example.com/v1/users/42'
        >>> resolve_url("https://api.example.com/v1/", "https://other.example.com/x")
        'https://other.example.com/x'
        >>> resolve_url(None, "users/42")
        'users/42'

        ```
    """
    if base_address is None:
        return str(url)
    return str(httpx.URL(base_address).join(url))


def create_request(
    config: DefaultConfig,
    method: str,
    url: str | httpx.URL,
    client: httpx.Client | httpx.AsyncClient,
) -> RestRequest:
    """Create a request builder seeded from the default configuration.

    The configuration is sealed, so that the base address cannot change
    once a request has been built from it. The default headers are added
    first. The default authorization is only used when the request sets
    no ``Authorization`` header of its own, and the default timeout can
    be overridden with ``set_timeout``.

    Args:
        config: The default configuration.
        method: The HTTP method.
        url: The request URL, resolved against the base address.
        client: The client the request is bound to.

    Returns:
        The request builder.
    """
    config.seal()
    request = RestRequest(
        method,
        resolve_url(config.base_address, url),
        client=client,
        default_authorization=config.authorization,
    )
    request.add_headers(config.headers)
    if config.timeout is not None:
        request.set_timeout(config.timeout)
    return request
