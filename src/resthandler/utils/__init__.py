r"""Utility functions for headers, JSON encoding and results.

This package provides helpers that do not perform any network I/O:
header normalization, the JSON codec, and the functions that inspect or
decode a completed ``RequestResult``.
"""

from __future__ import annotations

__all__ = [
    "deserialize",
    "has_header",
    "is_success",
    "is_success_async",
    "normalize_headers",
    "object_to_dict",
    "parse_as",
    "parse_as_async",
    "raw_payload",
    "raw_payload_async",
    "render_authorization",
    "serialize",
]

from resthandler.utils.codec import deserialize, serialize
from resthandler.utils.headers import (
    has_header,
    normalize_headers,
    object_to_dict,
    render_authorization,
)
from resthandler.utils.result import (
    is_success,
    is_success_async,
    parse_as,
    parse_as_async,
    raw_payload,
    raw_payload_async,
)
