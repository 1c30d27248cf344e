r"""Shared core logic for request executors.

This module provides the helpers used by both the synchronous and the
asynchronous executor: the mutable record of an execution, the
construction of a fresh wire request for every attempt, and the
handling of the outcome of an attempt.
"""

from __future__ import annotations

__all__ = [
    "ExecutionCancelledError",
    "ResultTracker",
    "attempt_deadline",
    "build_wire_request",
    "cancellation_message",
    "check_deadline",
    "handle_cancellation",
    "handle_exception",
    "handle_response",
]

import logging
import time
from typing import TYPE_CHECKING

import httpx

from resthandler.result import RequestResult, RequestState
from resthandler.utils.headers import has_header, render_authorization

if TYPE_CHECKING:
    from resthandler.request import RequestDescriptor
    from resthandler.retry.decider import FailureClassifier
    from resthandler.retry.manager import CallbackManager

logger: logging.Logger = logging.getLogger(__name__)


class ExecutionCancelledError(Exception):
    """Raised internally when the caller cancels an execution while an
    attempt is in flight."""


class ResultTracker:
    """Mutable record of one execution.

    The tracker is updated after every attempt and produces immutable
    ``RequestResult`` snapshots for the callbacks and for the caller.

    Attributes:
        state: The current state.
        status_code: The current status code.
        error_message: The current error message.
        payload: The payload of the successful response.
        error: The exception raised by the last attempt, if any.
        last_response_status: The status code of the last response
            received, if any.
    """

    def __init__(self) -> None:
        self.state = RequestState.SENDING
        self.status_code: int | None = None
        self.error_message: str | None = None
        self.payload: str | None = None
        self.error: Exception | None = None
        self.last_response_status: int | None = None
        self._start_time = time.monotonic()
        self._elapsed_time: float | None = None

    @property
    def elapsed_time(self) -> float:
        """Seconds since the execution started, frozen once finished."""
        if self._elapsed_time is not None:
            return self._elapsed_time
        return time.monotonic() - self._start_time

    def snapshot(self) -> RequestResult:
        return RequestResult(
            state=self.state,
            status_code=self.status_code,
            error_message=self.error_message,
            payload=self.payload,
            elapsed_time=self.elapsed_time,
            error=self.error,
        )

    def record_response(
        self, response: httpx.Response, message: str, payload: str | None = None
    ) -> None:
        """Record the outcome of a fully read response.

        Args:
            response: The response.
            message: The error message used if the response is not
                successful.
            payload: The decoded body, if it was read by the caller.
                Defaults to ``response.text``.
        """
        self.status_code = response.status_code
        self.last_response_status = response.status_code
        if response.is_success:
            self.state = RequestState.SUCCESS
            self.payload = response.text if payload is None else payload
            self.error_message = None
            self.error = None
        else:
            self.state = RequestState.FAILED
            self.payload = None
            self.error_message = message
            self.error = None

    def record_error(
        self, state: RequestState, status_code: int, error: Exception, fallback: bool = False
    ) -> None:
        """Record an exception raised during an attempt.

        Args:
            state: The state after the attempt.
            status_code: The status code reported for the exception.
            error: The exception.
            fallback: Whether ``status_code`` is a generic code. If
                ``True``, the status code of the last received response
                is kept when there is one.
        """
        self.state = state
        self.payload = None
        if fallback and self.last_response_status is not None:
            self.status_code = self.last_response_status
        else:
            self.status_code = status_code
        self.error_message = str(error) or type(error).__name__
        self.error = error

    def record_cancellation(self, message: str) -> None:
        self.state = RequestState.FAILED
        self.error_message = message

    def finish(self) -> RequestResult:
        """Stop the clock and return the final result.

        The status code of the last received response is used if no
        status code was recorded.
        """
        self._elapsed_time = time.monotonic() - self._start_time
        if self.status_code is None:
            self.status_code = self.last_response_status
        return self.snapshot()


def build_wire_request(
    client: httpx.Client | httpx.AsyncClient, descriptor: RequestDescriptor
) -> httpx.Request:
    """Build a new wire request from a descriptor.

    A new request, and a new body stream wrapping the descriptor
    content, is created on every call, so every attempt sends the full
    body.

    Args:
        client: The client used to send the request. Its base URL and
            default headers are applied by httpx.
        descriptor: The request descriptor.

    Returns:
        The request to send.
    """
    headers = list(descriptor.headers)
    if descriptor.content is not None and not has_header(headers, "Content-Type"):
        headers.append(("Content-Type", descriptor.media_type))
    if descriptor.authorization is not None:
        headers = [(k, v) for k, v in headers if k.lower() != "authorization"]
        headers.append(("Authorization", render_authorization(*descriptor.authorization)))
    return client.build_request(
        descriptor.method,
        descriptor.url,
        headers=headers,
        content=descriptor.content,
        timeout=(
            httpx.Timeout(descriptor.timeout)
            if descriptor.timeout is not None
            else httpx.USE_CLIENT_DEFAULT
        ),
    )


def attempt_deadline(timeout: float | None) -> float | None:
    """Return the monotonic time at which an attempt starting now times
    out, or ``None`` if there is no timeout."""
    if timeout is None:
        return None
    return time.monotonic() + timeout


def check_deadline(request: httpx.Request, deadline: float | None) -> None:
    """Raise ``httpx.ReadTimeout`` if the deadline of an attempt has
    passed.

    Example:
        ```pycon
        >>> import httpx
        >>> from resthandler.retry.executor_core import attempt_deadline, check_deadline
        >>> request = httpx.Request("GET", "https://api.example.com")
        >>> check_deadline(request, attempt_deadline(5.0))
        >>> check_deadline(request, None)

        ```
    """
    if deadline is not None and time.monotonic() >= deadline:
        msg = f"{request.method} request to {request.url} exceeded its timeout"
        raise httpx.ReadTimeout(msg, request=request)


def handle_response(
    response: httpx.Response,
    descriptor: RequestDescriptor,
    tracker: ResultTracker,
    callbacks: CallbackManager,
    attempt: int,
    max_attempts: int,
    payload: str | None = None,
) -> bool:
    """Record a fully read response and invoke the matching callback.

    Args:
        response: The response, whose body has been read.
        descriptor: The request descriptor.
        tracker: The execution record.
        callbacks: The callback manager.
        attempt: The current attempt number (0-indexed).
        max_attempts: The total number of attempts allowed.
        payload: The decoded body, if it was read by the caller.

    Returns:
        ``True`` if the response is successful and the execution must
        stop, otherwise ``False``.
    """
    method, url = descriptor.method, descriptor.url
    tracker.record_response(
        response,
        message=response.reason_phrase
        or f"{method} request to {url} failed with status {response.status_code}",
        payload=payload,
    )
    if tracker.state == RequestState.SUCCESS:
        logger.debug(
            f"{method} request to {url} succeeded with status {response.status_code} "
            f"on attempt {attempt + 1}/{max_attempts}"
        )
        callbacks.on_success(tracker.snapshot())
        return True

    logger.debug(
        f"{method} request to {url} failed with status {response.status_code} "
        f"on attempt {attempt + 1}/{max_attempts}"
    )
    callbacks.on_failure(tracker.snapshot())
    return False


def handle_exception(
    exc: Exception,
    descriptor: RequestDescriptor,
    tracker: ResultTracker,
    classifier: FailureClassifier,
    callbacks: CallbackManager,
    attempt: int,
    max_attempts: int,
) -> None:
    """Record an exception raised during an attempt and invoke the
    matching callback.

    Timeouts and transport errors invoke ``on_failure``; unexpected
    exceptions invoke ``on_exception``.

    Args:
        exc: The exception raised during the attempt.
        descriptor: The request descriptor.
        tracker: The execution record.
        classifier: The classifier deciding how the exception is reported.
        callbacks: The callback manager.
        attempt: The current attempt number (0-indexed).
        max_attempts: The total number of attempts allowed.
    """
    classification = classifier.classify(exc)
    tracker.record_error(
        state=classification.state,
        status_code=classification.status_code,
        error=exc,
        fallback=classification.fallback,
    )
    logger.debug(
        f"{descriptor.method} request to {descriptor.url} encountered {type(exc).__name__} "
        f"({classification.kind.value}) on attempt {attempt + 1}/{max_attempts}: {exc}"
    )
    if classification.state == RequestState.ERROR:
        callbacks.on_exception(exc)
    else:
        callbacks.on_failure(tracker.snapshot())


def cancellation_message(descriptor: RequestDescriptor) -> str:
    return f"{descriptor.method} request to {descriptor.url} was cancelled"


def handle_cancellation(
    descriptor: RequestDescriptor, tracker: ResultTracker, callbacks: CallbackManager
) -> None:
    """Record the cancellation of an execution by the caller and invoke
    ``on_failure``."""
    tracker.record_cancellation(cancellation_message(descriptor))
    logger.debug(f"{descriptor.method} request to {descriptor.url} was cancelled by the caller")
    callbacks.on_failure(tracker.snapshot())
