r"""Unit tests for AsyncRestClient context manager."""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import Mock

import httpx
import pytest

from resthandler import AsyncRestClient, DefaultConfig, RequestState, RestRequest
from resthandler.exceptions import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Callable

BASE = "https://api.example.com/v1/"


#####################################
#     Tests for AsyncRestClient     #
#####################################


@pytest.mark.asyncio
async def test_async_client_creates_and_closes_client() -> None:
    async with AsyncRestClient() as client:
        http_client = client._client
        assert isinstance(http_client, httpx.AsyncClient)
        assert not http_client.is_closed
    assert http_client.is_closed


@pytest.mark.asyncio
async def test_async_client_closes_on_exception() -> None:
    msg = "test error"
    with pytest.raises(ValueError, match=r"test error"):
        async with AsyncRestClient() as client:
            http_client = client._client
            raise ValueError(msg)
    assert http_client.is_closed


@pytest.mark.asyncio
async def test_async_client_external_client_not_closed(
    make_async_client: Callable[..., httpx.AsyncClient],
) -> None:
    async with make_async_client(200) as http_client:
        async with AsyncRestClient(client=http_client) as client:
            result = await client.get("https://api.example.com/data").send_async()
        assert result.state == RequestState.SUCCESS
        assert not http_client.is_closed


@pytest.mark.parametrize("method", ["get", "post", "put", "delete"])
def test_async_client_factories(method: str) -> None:
    config = DefaultConfig(base_address=BASE)
    client = AsyncRestClient(config=config, client=Mock(spec=httpx.AsyncClient))
    request = getattr(client, method)("users/42")
    assert isinstance(request, RestRequest)
    assert request.method == method.upper()
    assert request.url == "https://api.example.com/v1/users/42"
    assert config.sealed


def test_async_client_config_property() -> None:
    config = DefaultConfig()
    assert AsyncRestClient(config=config, client=Mock(spec=httpx.AsyncClient)).config is config


def test_async_client_request_seals_config() -> None:
    config = DefaultConfig(base_address=BASE)
    client = AsyncRestClient(config=config, client=Mock(spec=httpx.AsyncClient))
    client.post("users")
    with pytest.raises(ConfigurationError, match=r"the base address cannot be changed"):
        config.remove_base_address()


@pytest.mark.asyncio
async def test_async_client_applies_default_config(
    make_async_client: Callable[..., httpx.AsyncClient],
) -> None:
    config = DefaultConfig(
        base_address=BASE,
        headers={"Accept": "application/json"},
        authorization=("Basic", "dXNlcjpwYXNz"),
        timeout=3.0,
    )
    async with make_async_client(httpx.Response(200, text="[]")) as http_client:
        async with AsyncRestClient(config=config, client=http_client) as client:
            result = await client.get("users").send_async()

    assert result.state == RequestState.SUCCESS
    (request,) = http_client.handler.requests
    assert request.url == "https://api.example.com/v1/users"
    assert request.headers["Accept"] == "application/json"
    assert request.headers["Authorization"] == "Basic dXNlcjpwYXNz"
    assert request.extensions["timeout"]["read"] == 3.0


@pytest.mark.asyncio
async def test_async_client_retries(
    make_async_client: Callable[..., httpx.AsyncClient], mock_asleep: Mock
) -> None:
    async with make_async_client(500, 500, 200) as http_client:
        async with AsyncRestClient(
            config=DefaultConfig(base_address=BASE), client=http_client
        ) as client:
            result = await client.post("items").with_content([1, 2]).set_retries(3).send_async()

    assert result.state == RequestState.SUCCESS
    assert len(http_client.handler.requests) == 3
    assert mock_asleep.call_count == 2


@pytest.mark.asyncio
async def test_async_client_request_rejects_sync_send(
    make_async_client: Callable[..., httpx.AsyncClient],
) -> None:
    async with make_async_client(200) as http_client:
        async with AsyncRestClient(client=http_client) as client:
            with pytest.raises(ConfigurationError, match=r"send requires an httpx.Client"):
                client.get("https://api.example.com/").send()
