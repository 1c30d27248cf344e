r"""JSON codec used for request bodies and response payloads.

The codec relies on ``pydantic.TypeAdapter`` so that plain JSON values,
dataclasses, ``TypedDict`` types and pydantic models are all supported
in both directions.
"""

from __future__ import annotations

__all__ = ["deserialize", "serialize"]

from typing import Any, TypeVar

from pydantic import PydanticUserError, TypeAdapter, ValidationError

from resthandler.exceptions import DecodeError

T = TypeVar("T")

_ANY_ADAPTER: TypeAdapter[Any] = TypeAdapter(Any)


def serialize(value: Any) -> bytes:
    """Serialize a value to JSON.

    Args:
        value: The value to serialize. Its type is inspected at runtime,
            so dataclasses and pydantic models are serialized field by
            field.

    Returns:
        The UTF-8 encoded JSON document.

    Example:
        ```pycon
        >>> from resthandler.utils.codec import serialize
        >>> serialize({"name": "test", "age": 10})
        b'{"name":"test","age":10}'

        ```
    """
    return _ANY_ADAPTER.dump_json(value)


def deserialize(data: str | bytes, type_: type[T]) -> T:
    """Decode a JSON document into a value of the given type.

    Args:
        data: The JSON document.
        type_: The expected type, e.g. ``list[int]``, a dataclass or a
            pydantic model.

    Returns:
        The decoded value.

    Raises:
        DecodeError: If ``data`` is not valid JSON or does not match
            ``type_``, or if ``type_`` is not a type pydantic can
            validate.

    Example:
        ```pycon
        >>> from resthandler.utils.codec import deserialize
        >>> deserialize('{"id": "abc", "width": 10}', dict[str, str | int])
        {'id': 'abc', 'width': 10}

        ```
    """
    try:
        return TypeAdapter(type_).validate_json(data)
    except (ValidationError, PydanticUserError) as exc:
        msg = f"could not decode payload as {getattr(type_, '__name__', type_)}: {exc}"
        raise DecodeError(msg) from exc
