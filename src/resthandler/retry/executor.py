r"""Synchronous retry executor for HTTP requests.

This module provides the RequestExecutor class that executes a request
descriptor with an ``httpx.Client``, retrying according to the retry
policy and folding every outcome into a ``RequestResult``.
"""

from __future__ import annotations

__all__ = ["RequestExecutor"]

import logging
import time
from typing import TYPE_CHECKING

from resthandler.result import RequestState
from resthandler.retry.decider import FailureClassifier
from resthandler.retry.executor_core import (
    ResultTracker,
    attempt_deadline,
    build_wire_request,
    check_deadline,
    handle_cancellation,
    handle_exception,
    handle_response,
)
from resthandler.retry.manager import CallbackManager

if TYPE_CHECKING:
    import threading

    import httpx

    from resthandler.request import RequestDescriptor
    from resthandler.result import RequestResult

logger: logging.Logger = logging.getLogger(__name__)


class RequestExecutor:
    """Executes a request with automatic retry logic.

    The executor makes up to ``max_attempts + 1`` attempts. Attempts are
    strictly sequential: the response of an attempt is read and closed
    before the next attempt starts. The execution stops at the first
    successful response.

    The per-attempt timeout of the descriptor bounds every network
    operation of the attempt in httpx, and a deadline armed when the
    attempt starts is checked after sending and after every chunk of the
    body, so a server that keeps sending slowly cannot extend the
    attempt. Each attempt gets a fresh deadline.

    Attributes:
        descriptor: The request to execute.
        classifier: Classifies the exceptions raised by attempts.
        callbacks: Manager for invoking callbacks.

    Example:
        ```pycon
        >>> import httpx
        >>> from resthandler import RestRequest
        >>> from resthandler.retry import RequestExecutor
        >>> descriptor = RestRequest.get("https://api.example.com/data").set_retries(2).build()
        >>> with httpx.Client() as client:  # doctest: +SKIP
        ...     result = RequestExecutor(descriptor).execute(client)
        ...

        ```
    """

    def __init__(self, descriptor: RequestDescriptor) -> None:
        self.descriptor = descriptor
        self.classifier: FailureClassifier = FailureClassifier(descriptor.timeout)
        self.callbacks: CallbackManager = CallbackManager(descriptor.callbacks)

    def execute(
        self, client: httpx.Client, cancel_event: threading.Event | None = None
    ) -> RequestResult:
        """Execute the request.

        Args:
            client: The client used to send every attempt.
            cancel_event: Optional event the caller can set to stop the
                execution. It is checked before every attempt and while
                waiting between attempts.

        Returns:
            The result of the execution. No exception raised by an
            attempt escapes this method.
        """
        tracker = ResultTracker()
        policy = self.descriptor.retry_policy
        retry_budget = policy.max_attempts if policy is not None else 0
        max_attempts = retry_budget + 1

        for attempt in range(max_attempts):
            if attempt > 0:
                self._wait_before_retry(tracker, attempt, cancel_event)
            if cancel_event is not None and cancel_event.is_set():
                handle_cancellation(self.descriptor, tracker, self.callbacks)
                break
            if self._attempt(client, tracker, attempt, max_attempts):
                break

        return tracker.finish()

    def _attempt(
        self, client: httpx.Client, tracker: ResultTracker, attempt: int, max_attempts: int
    ) -> bool:
        response: httpx.Response | None = None
        deadline = attempt_deadline(self.descriptor.timeout)
        try:
            request = build_wire_request(client, self.descriptor)
            response = client.send(request, stream=True)
            payload = self._read(response, deadline)
            return handle_response(
                response,
                self.descriptor,
                tracker,
                self.callbacks,
                attempt,
                max_attempts,
                payload=payload,
            )
        except Exception as exc:  # noqa: BLE001
            handle_exception(
                exc,
                self.descriptor,
                tracker,
                self.classifier,
                self.callbacks,
                attempt,
                max_attempts,
            )
            return False
        finally:
            if response is not None:
                response.close()

    def _read(self, response: httpx.Response, deadline: float | None) -> str:
        """Read and decode the body of a response before the deadline.

        Raises:
            httpx.ReadTimeout: If the deadline passes before the body
                is fully read.
        """
        check_deadline(response.request, deadline)
        chunks = []
        for chunk in response.iter_text():
            check_deadline(response.request, deadline)
            chunks.append(chunk)
        return "".join(chunks)

    def _wait_before_retry(
        self, tracker: ResultTracker, attempt: int, cancel_event: threading.Event | None
    ) -> None:
        tracker.state = RequestState.RETRYING
        self.callbacks.on_retry(tracker.snapshot(), attempt, tracker.elapsed_time)

        delay = self.descriptor.retry_policy.delay(attempt)
        if delay <= 0:
            return
        logger.debug(
            f"Waiting {delay:.2f}s before retry {attempt} of "
            f"{self.descriptor.method} request to {self.descriptor.url}"
        )
        if cancel_event is None:
            time.sleep(delay)
        else:
            cancel_event.wait(delay)
