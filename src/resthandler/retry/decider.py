r"""Classification of the exceptions raised during an attempt.

This module provides the FailureClassifier class that decides how an
exception raised while sending a request is reported in the result:
as a timeout, as a recognized transport error, or as an unexpected
error.
"""

from __future__ import annotations

__all__ = ["Classification", "FailureClassifier", "FailureKind"]

from dataclasses import dataclass
from enum import Enum

import httpx

from resthandler.core.config import GENERIC_ERROR_STATUS, REQUEST_TIMEOUT_STATUS
from resthandler.exceptions import HttpRequestError
from resthandler.result import RequestState


class FailureKind(Enum):
    """Kinds of exception raised during an attempt.

    Attributes:
        TIMEOUT: The attempt exceeded the timeout configured on the request.
        TRANSPORT: The transport reported a network or protocol error.
        UNEXPECTED: Any other exception.
    """

    TIMEOUT = "timeout"
    TRANSPORT = "transport"
    UNEXPECTED = "unexpected"


@dataclass(frozen=True)
class Classification:
    """How an exception is reported.

    Attributes:
        kind: The kind of failure.
        state: The state of the result after the attempt.
        status_code: The status code reported in the result.
        fallback: Whether ``status_code`` is the generic server error
            code used when the exception carries no status code. A
            fallback code does not replace the status code of a
            response received by an earlier attempt.
    """

    kind: FailureKind
    state: RequestState
    status_code: int
    fallback: bool = False


class FailureClassifier:
    """Classifies the exceptions raised during an attempt.

    Args:
        timeout: The per-attempt timeout configured on the request, if any.
            Timeout exceptions are only reported as timeouts when a
            timeout is configured.

    Example:
        ```pycon
        >>> import httpx
        >>> from resthandler.retry.decider import FailureClassifier
        >>> classifier = FailureClassifier(timeout=5.0)
        >>> classifier.classify(httpx.ReadTimeout("timed out")).status_code
        408
        >>> classifier.classify(httpx.ConnectError("refused")).status_code
        500
        >>> classifier.classify(KeyError("oops")).kind
        <FailureKind.UNEXPECTED: 'unexpected'>

        ```
    """

    def __init__(self, timeout: float | None = None) -> None:
        self.timeout = timeout

    def classify(self, exc: Exception) -> Classification:
        if self.is_timeout(exc):
            return Classification(
                kind=FailureKind.TIMEOUT,
                state=RequestState.FAILED,
                status_code=REQUEST_TIMEOUT_STATUS,
            )
        status_code = self.transport_status_code(exc)
        if status_code is not None:
            return Classification(
                kind=FailureKind.TRANSPORT,
                state=RequestState.FAILED,
                status_code=status_code,
                fallback=not self.carries_status_code(exc),
            )
        return Classification(
            kind=FailureKind.UNEXPECTED,
            state=RequestState.ERROR,
            status_code=GENERIC_ERROR_STATUS,
            fallback=True,
        )

    def is_timeout(self, exc: Exception) -> bool:
        """Indicate whether the exception comes from the timeout
        configured on the request."""
        if self.timeout is None or self.timeout <= 0:
            return False
        return isinstance(exc, (httpx.TimeoutException, TimeoutError))

    @staticmethod
    def carries_status_code(exc: Exception) -> bool:
        """Indicate whether the exception carries its own status code."""
        if isinstance(exc, HttpRequestError):
            return bool(exc.status_code)
        return isinstance(exc, httpx.HTTPStatusError)

    @staticmethod
    def transport_status_code(exc: Exception) -> int | None:
        """Return the status code of a recognized transport error.

        Returns:
            The status code carried by the exception, the generic server
            error code if it carries none, or ``None`` if the exception
            is not a recognized transport error.
        """
        if isinstance(exc, HttpRequestError):
            return exc.status_code or GENERIC_ERROR_STATUS
        if isinstance(exc, httpx.HTTPStatusError):
            return exc.response.status_code
        if isinstance(exc, httpx.HTTPError):
            return GENERIC_ERROR_STATUS
        return None
