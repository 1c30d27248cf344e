r"""Unit tests for RestClient context manager."""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import Mock, patch

import httpx
import pytest

from resthandler import DefaultConfig, RequestState, RestClient, RestRequest
from resthandler.exceptions import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Callable

BASE = "https://api.example.com/v1/"


################################
#     Tests for RestClient     #
################################


def test_client_creates_and_closes_client() -> None:
    """Test that RestClient closes the client it created."""
    with RestClient() as client:
        http_client = client._client
        assert isinstance(http_client, httpx.Client)
        assert not http_client.is_closed
    assert http_client.is_closed


def test_client_closes_on_exception() -> None:
    msg = "test error"
    with pytest.raises(ValueError, match=r"test error"), RestClient() as client:
        http_client = client._client
        raise ValueError(msg)
    assert http_client.is_closed


def test_client_external_client_not_closed(make_client: Callable[..., httpx.Client]) -> None:
    """Test that a client passed by the caller is left open."""
    http_client = make_client(200)
    with RestClient(client=http_client) as client:
        result = client.get("https://api.example.com/data").send()
    assert result.state == RequestState.SUCCESS
    assert not http_client.is_closed


def test_client_default_config() -> None:
    with RestClient() as client:
        assert isinstance(client.config, DefaultConfig)
        assert client.config.base_address is None


def test_client_config_property() -> None:
    config = DefaultConfig()
    assert RestClient(config=config, client=Mock(spec=httpx.Client)).config is config


@pytest.mark.parametrize("method", ["get", "post", "put", "delete"])
def test_client_factories(method: str, make_client: Callable[..., httpx.Client]) -> None:
    config = DefaultConfig(base_address=BASE)
    with RestClient(config=config, client=make_client(200)) as client:
        request = getattr(client, method)("users/42")
    assert isinstance(request, RestRequest)
    assert request.method == method.upper()
    assert request.url == "https://api.example.com/v1/users/42"


def test_client_request_seals_config(make_client: Callable[..., httpx.Client]) -> None:
    config = DefaultConfig(base_address=BASE)
    with RestClient(config=config, client=make_client(200)) as client:
        client.get("users")
        with pytest.raises(ConfigurationError, match=r"the base address cannot be changed"):
            config.set_base_address("https://other.example.com/")


def test_client_applies_default_config(make_client: Callable[..., httpx.Client]) -> None:
    """Test that the default headers, authorization and timeout are
    sent."""
    http_client = make_client(httpx.Response(200, text="{}"))
    config = DefaultConfig(
        base_address=BASE,
        headers={"Accept": "application/json"},
        authorization=("Bearer", "default-token"),
        timeout=3.0,
    )
    with RestClient(config=config, client=http_client) as client:
        result = client.get("users/42").add_header("X-Tag", "a").send()

    assert result.state == RequestState.SUCCESS
    (request,) = http_client.handler.requests
    assert request.url == "https://api.example.com/v1/users/42"
    assert list(request.headers.items())[-3:] == [
        ("accept", "application/json"),
        ("x-tag", "a"),
        ("authorization", "Bearer default-token"),
    ]
    assert request.extensions["timeout"]["read"] == 3.0


def test_client_request_overrides_default_config(
    make_client: Callable[..., httpx.Client],
) -> None:
    http_client = make_client(200)
    config = DefaultConfig(authorization=("Bearer", "default-token"), timeout=3.0)
    with RestClient(config=config, client=http_client) as client:
        client.get("https://api.example.com/").with_authorization("Token", "mine").set_timeout(
            0.5
        ).send()

    (request,) = http_client.handler.requests
    assert request.headers["Authorization"] == "Token mine"
    assert request.extensions["timeout"]["read"] == 0.5


def test_client_request_without_authorization(make_client: Callable[..., httpx.Client]) -> None:
    http_client = make_client(200)
    config = DefaultConfig(authorization=("Bearer", "default-token"))
    with RestClient(config=config, client=http_client) as client:
        client.get("https://api.example.com/").without_authorization().send()

    assert "Authorization" not in http_client.handler.requests[0].headers


def test_client_request_authorization_header_replaces_default(
    make_client: Callable[..., httpx.Client],
) -> None:
    http_client = make_client(200)
    config = DefaultConfig(authorization=("Bearer", "default-token"))
    with RestClient(config=config, client=http_client) as client:
        client.get("https://api.example.com/").add_header(
            "Authorization", "Basic dXNlcjpwYXNz"
        ).send()

    (request,) = http_client.handler.requests
    assert request.headers.get_list("Authorization") == ["Basic dXNlcjpwYXNz"]


def test_client_absolute_url_ignores_base_address(
    make_client: Callable[..., httpx.Client],
) -> None:
    config = DefaultConfig(base_address=BASE)
    with RestClient(config=config, client=make_client(200)) as client:
        request = client.delete("https://other.example.com/x")
    assert request.url == "https://other.example.com/x"


def test_client_retries(make_client: Callable[..., httpx.Client], mock_sleep: Mock) -> None:
    http_client = make_client(503, 200)
    with RestClient(config=DefaultConfig(base_address=BASE), client=http_client) as client:
        result = client.put("users/42").with_content({"name": "Ada"}).set_retries(2).send()

    assert result.state == RequestState.SUCCESS
    assert len(http_client.handler.requests) == 2
    mock_sleep.assert_called_once_with(1.0)


def test_client_uses_created_client() -> None:
    with patch("resthandler.client.httpx.Client") as client_cls:
        mock_client = client_cls.return_value
        with RestClient() as client:
            assert client._client is mock_client
        mock_client.__enter__.assert_called_once_with()
        mock_client.__exit__.assert_called_once_with(None, None, None)
