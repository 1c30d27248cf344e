r"""Utilities operating on a completed ``RequestResult``.

None of these functions touch the network. The ``*_async`` variants
await a pending execution, for example the coroutine returned by
``RestRequest.send_async()``, and then apply the synchronous function.

Example:
    ```pycon
    >>> import asyncio
    >>> from resthandler import RestRequest
    >>> from resthandler.utils.result import parse_as_async
    >>> images = asyncio.run(
    ...     parse_as_async(RestRequest.get("https://api.example.com/images").send_async(), list)
    ... )  # doctest: +SKIP

    ```
"""

from __future__ import annotations

__all__ = [
    "is_success",
    "is_success_async",
    "parse_as",
    "parse_as_async",
    "raw_payload",
    "raw_payload_async",
]

import logging
from typing import TYPE_CHECKING, TypeVar

from resthandler.exceptions import DecodeError
from resthandler.result import RequestResult, RequestState
from resthandler.utils.codec import deserialize

if TYPE_CHECKING:
    from collections.abc import Awaitable

T = TypeVar("T")

logger: logging.Logger = logging.getLogger(__name__)


def is_success(result: RequestResult) -> bool:
    """Indicate whether the request succeeded.

    Example:
        ```pycon
        >>> from resthandler.result import RequestResult, RequestState
        >>> from resthandler.utils.result import is_success
        >>> is_success(RequestResult(state=RequestState.SUCCESS, payload="{}"))
        True
        >>> is_success(RequestResult(state=RequestState.FAILED, error_message="Not Found"))
        False

        ```
    """
    return result.state == RequestState.SUCCESS


def raw_payload(result: RequestResult) -> str:
    """Return the payload of the result, or an empty string if there is
    none."""
    return result.payload or ""


def parse_as(result: RequestResult, type_: type[T], default: T | None = None) -> T | None:
    """Decode the payload of a successful result.

    Decoding failures are logged and swallowed.

    Args:
        result: The result to decode.
        type_: The expected type, e.g. ``list[int]``, a dataclass or a
            pydantic model.
        default: The value returned when the request did not succeed,
            the payload is empty, or the payload cannot be decoded.

    Returns:
        The decoded payload, or ``default``.

    Example:
        ```pycon
        >>> from dataclasses import dataclass
        >>> from resthandler.result import RequestResult, RequestState
        >>> from resthandler.utils.result import parse_as
        >>> @dataclass
        ... class Image:
        ...     id: str
        ...     width: int
        ...     height: int
        ...
        >>> result = RequestResult(
        ...     state=RequestState.SUCCESS, payload='{"id":"abc","width":10,"height":20}'
        ... )
        >>> parse_as(result, Image)
        Image(id='abc', width=10, height=20)
        >>> parse_as(RequestResult(state=RequestState.SUCCESS, payload="{oops"), Image) is None
        True

        ```
    """
    if result.state != RequestState.SUCCESS or not result.payload:
        return default
    try:
        return deserialize(result.payload, type_)
    except DecodeError as exc:
        logger.warning(f"Could not convert payload to {getattr(type_, '__name__', type_)}: {exc}")
        return default


async def is_success_async(pending: Awaitable[RequestResult]) -> bool:
    return is_success(await pending)


async def raw_payload_async(pending: Awaitable[RequestResult]) -> str:
    return raw_payload(await pending)


async def parse_as_async(
    pending: Awaitable[RequestResult], type_: type[T], default: T | None = None
) -> T | None:
    r"""Await a pending execution and decode its payload with
    ``parse_as``."""
    return parse_as(await pending, type_, default)
