from __future__ import annotations

from typing import TYPE_CHECKING, Any
from unittest.mock import Mock, patch

import httpx
import pytest

if TYPE_CHECKING:
    from collections.abc import Callable, Generator


@pytest.fixture
def mock_sleep() -> Generator[Mock, None, None]:
    """Patch time.sleep to make tests run faster."""
    with patch("time.sleep", return_value=None) as mock:
        yield mock


@pytest.fixture
def mock_asleep() -> Generator[Mock, None, None]:
    """Patch asyncio.sleep to make tests run faster."""
    with patch("asyncio.sleep", return_value=None) as mock:
        yield mock


@pytest.fixture
def mock_callback() -> Mock:
    """Create a mock callback function for testing callbacks."""
    return Mock()


def sequence_handler(*outcomes: Any) -> Callable[[httpx.Request], httpx.Response]:
    """Create a transport handler that replays outcomes in order.

    Each outcome is either an ``httpx.Response`` returned for the
    request, an ``int`` status code, or an exception raised by the
    transport. The last outcome is repeated once the others have been
    used.

    The handler records every request it receives in its ``requests``
    attribute.
    """
    remaining = list(outcomes)
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        outcome = remaining.pop(0) if len(remaining) > 1 else remaining[0]
        if isinstance(outcome, BaseException):
            raise outcome
        if isinstance(outcome, int):
            return httpx.Response(outcome)
        return outcome

    handler.requests = requests
    return handler


@pytest.fixture
def make_client() -> Generator[Callable[..., httpx.Client], None, None]:
    """Create httpx clients sending requests to a mock transport."""
    clients: list[httpx.Client] = []

    def factory(*outcomes: Any, **kwargs: Any) -> httpx.Client:
        handler = sequence_handler(*outcomes)
        client = httpx.Client(transport=httpx.MockTransport(handler), **kwargs)
        client.handler = handler
        clients.append(client)
        return client

    yield factory
    for client in clients:
        client.close()


@pytest.fixture
def make_async_client() -> Callable[..., httpx.AsyncClient]:
    """Create async httpx clients sending requests to a mock transport."""

    def factory(*outcomes: Any, **kwargs: Any) -> httpx.AsyncClient:
        handler = sequence_handler(*outcomes)
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler), **kwargs)
        client.handler = handler
        return client

    return factory
