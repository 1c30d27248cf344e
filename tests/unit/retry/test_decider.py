r"""Unit tests for the failure classifier."""

from __future__ import annotations

import httpx
import pytest

from resthandler.exceptions import HttpRequestError
from resthandler.result import RequestState
from resthandler.retry.decider import Classification, FailureClassifier, FailureKind


def status_error(status_code: int) -> httpx.HTTPStatusError:
    request = httpx.Request("GET", "https://example.com")
    response = httpx.Response(status_code, request=request)
    return httpx.HTTPStatusError("error", request=request, response=response)


@pytest.mark.parametrize(
    "exc", [httpx.ReadTimeout("timed out"), httpx.ConnectTimeout("timed out"), TimeoutError()]
)
def test_classify_timeout(exc: Exception) -> None:
    assert FailureClassifier(timeout=5.0).classify(exc) == Classification(
        kind=FailureKind.TIMEOUT, state=RequestState.FAILED, status_code=408
    )


def test_classify_httpx_timeout_without_configured_timeout() -> None:
    """Test that a transport timeout is a transport error when no
    timeout is configured on the request."""
    assert FailureClassifier().classify(httpx.ReadTimeout("timed out")) == Classification(
        kind=FailureKind.TRANSPORT, state=RequestState.FAILED, status_code=500, fallback=True
    )


def test_classify_builtin_timeout_without_configured_timeout() -> None:
    assert FailureClassifier().classify(TimeoutError()).kind == FailureKind.UNEXPECTED


def test_classify_http_request_error_with_status() -> None:
    exc = HttpRequestError(method="GET", url="https://example.com", message="x", status_code=502)
    assert FailureClassifier().classify(exc) == Classification(
        kind=FailureKind.TRANSPORT, state=RequestState.FAILED, status_code=502
    )


def test_classify_http_request_error_without_status() -> None:
    exc = HttpRequestError(method="GET", url="https://example.com", message="x")
    assert FailureClassifier().classify(exc).status_code == 500
    assert FailureClassifier().classify(exc).fallback


def test_classify_http_status_error() -> None:
    assert FailureClassifier().classify(status_error(503)) == Classification(
        kind=FailureKind.TRANSPORT, state=RequestState.FAILED, status_code=503
    )


@pytest.mark.parametrize(
    "exc",
    [
        httpx.ConnectError("refused"),
        httpx.ReadError("reset"),
        httpx.RemoteProtocolError("bad"),
        httpx.UnsupportedProtocol("missing scheme"),
    ],
)
def test_classify_transport_error(exc: Exception) -> None:
    assert FailureClassifier(timeout=1.0).classify(exc) == Classification(
        kind=FailureKind.TRANSPORT, state=RequestState.FAILED, status_code=500, fallback=True
    )


@pytest.mark.parametrize("exc", [KeyError("oops"), ValueError("bad"), RuntimeError()])
def test_classify_unexpected(exc: Exception) -> None:
    assert FailureClassifier(timeout=1.0).classify(exc) == Classification(
        kind=FailureKind.UNEXPECTED, state=RequestState.ERROR, status_code=500, fallback=True
    )


def test_is_timeout() -> None:
    classifier = FailureClassifier(timeout=1.0)
    assert classifier.is_timeout(httpx.WriteTimeout("timed out"))
    assert not classifier.is_timeout(httpx.ConnectError("refused"))


def test_transport_status_code_unknown() -> None:
    assert FailureClassifier.transport_status_code(KeyError("oops")) is None


def test_carries_status_code() -> None:
    assert FailureClassifier.carries_status_code(status_error(502))
    assert FailureClassifier.carries_status_code(
        HttpRequestError(method="GET", url="https://example.com", message="x", status_code=502)
    )
    assert not FailureClassifier.carries_status_code(
        HttpRequestError(method="GET", url="https://example.com", message="x")
    )
    assert not FailureClassifier.carries_status_code(httpx.ConnectError("refused"))
