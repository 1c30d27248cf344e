r"""Header normalization utilities.

Headers are stored as ordered lists of ``(name, value)`` pairs so that
duplicate names are kept, as HTTP allows.
"""

from __future__ import annotations

__all__ = ["has_header", "normalize_headers", "object_to_dict", "render_authorization"]

import dataclasses
from collections.abc import Iterable, Mapping
from typing import Any

import httpx

from resthandler.exceptions import ConfigurationError


def object_to_dict(obj: Any) -> dict[str, str]:
    """Convert the public attributes of an object to a dictionary of
    strings.

    Attributes whose value is ``None`` and attributes whose name starts
    with an underscore are skipped.

    Args:
        obj: A dataclass instance or any object with a ``__dict__``.

    Returns:
        A dictionary mapping attribute names to their string values.

    Raises:
        ConfigurationError: If the attributes of ``obj`` cannot be listed.

    Example:
        ```pycon
        >>> from dataclasses import dataclass
        >>> from resthandler.utils.headers import object_to_dict
        >>> @dataclass
        ... class Headers:
        ...     accept: str = "application/json"
        ...     page: int = 2
        ...     cursor: str | None = None
        ...
        >>> object_to_dict(Headers())
        {'accept': 'application/json', 'page': '2'}

        ```
    """
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        values = {field.name: getattr(obj, field.name) for field in dataclasses.fields(obj)}
    elif hasattr(obj, "__dict__"):
        values = vars(obj)
    else:
        msg = f"cannot convert {type(obj).__qualname__} to a dictionary"
        raise ConfigurationError(msg)
    return {
        name: str(value)
        for name, value in values.items()
        if not name.startswith("_") and value is not None
    }


def normalize_headers(headers: Any) -> list[tuple[str, str]]:
    """Convert headers to an ordered list of ``(name, value)`` pairs.

    Args:
        headers: ``None``, a mapping, an ``httpx.Headers`` object, a list
            or tuple of pairs, or an object whose public attributes are
            used as headers.

    Returns:
        The headers as a list of string pairs. Duplicated names are kept.

    Example:
        ```pycon
        >>> from resthandler.utils.headers import normalize_headers
        >>> normalize_headers({"Accept": "application/json"})
        [('Accept', 'application/json')]
        >>> normalize_headers([("X-Tag", "a"), ("X-Tag", "b")])
        [('X-Tag', 'a'), ('X-Tag', 'b')]
        >>> normalize_headers(None)
        []

        ```
    """
    if headers is None:
        return []
    if isinstance(headers, httpx.Headers):
        items = headers.multi_items()
    elif isinstance(headers, Mapping):
        items = headers.items()
    elif isinstance(headers, (list, tuple)):
        items = headers
    else:
        items = object_to_dict(headers).items()
    return [(str(name), str(value)) for name, value in items]


def has_header(headers: Iterable[tuple[str, str]], name: str) -> bool:
    """Indicate whether a header name is present, ignoring case.

    Example:
        ```pycon
        >>> from resthandler.utils.headers import has_header
        >>> has_header([("content-type", "text/plain")], "Content-Type")
        True

        ```
    """
    name = name.lower()
    return any(key.lower() == name for key, _ in headers)


def render_authorization(scheme: str, credential: str) -> str:
    """Render the value of an ``Authorization`` header.

    Example:
        ```pycon
        >>> from resthandler.utils.headers import render_authorization
        >>> render_authorization("Bearer", "token")
        'Bearer token'

        ```
    """
    return f"{scheme} {credential}"
