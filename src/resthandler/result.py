r"""Outcome of executing a request.

Every execution call returns exactly one ``RequestResult``, whatever
happened on the network: a success, an unsuccessful status code, a
timeout, a transport error or an unexpected exception.
"""

from __future__ import annotations

__all__ = ["RequestResult", "RequestState"]

from dataclasses import dataclass
from enum import Enum


class RequestState(Enum):
    """States of a request execution.

    Attributes:
        SENDING: The first attempt is in progress.
        RETRYING: A previous attempt did not succeed and another one is
            about to be made.
        SUCCESS: A response with a 2xx status code was received.
        FAILED: The last attempt received an unsuccessful status code,
            timed out, hit a transport error or was cancelled.
        ERROR: The last attempt raised an unexpected exception.
    """

    SENDING = "sending"
    RETRYING = "retrying"
    SUCCESS = "success"
    FAILED = "failed"
    ERROR = "error"


@dataclass(frozen=True)
class RequestResult:
    """Result of a request execution.

    Attributes:
        state: The final state of the execution.
        status_code: The status code of the last response, or a
            synthesized code (408 on timeout, 500 on errors without a
            status code). ``None`` if nothing was received or synthesized.
        error_message: A human readable explanation, set whenever
            ``state`` is ``FAILED`` or ``ERROR``.
        payload: The body of the successful response.
        elapsed_time: Wall-clock seconds from the start of the first
            attempt to the final outcome, retry delays included.
        error: The exception raised by the last attempt, if any.

    Example:
        ```pycon
        >>> from resthandler.result import RequestResult, RequestState
        >>> result = RequestResult(
        ...     state=RequestState.SUCCESS, status_code=200, payload="[]", elapsed_time=0.25
        ... )
        >>> print(result)
        RequestResult(state=success, status_code=200, error_message=None, payload='[]', elapsed_time=0.25s)

        ```
    """

    state: RequestState
    status_code: int | None = None
    error_message: str | None = None
    payload: str | None = None
    elapsed_time: float = 0.0
    error: Exception | None = None

    def __str__(self) -> str:
        return (
            f"RequestResult(state={self.state.value}, status_code={self.status_code}, "
            f"error_message={self.error_message!r}, payload={self.payload!r}, "
            f"elapsed_time={self.elapsed_time:.2f}s)"
        )
