r"""Asynchronous retry executor for HTTP requests.

This module provides the AsyncRequestExecutor class that executes a
request descriptor with an ``httpx.AsyncClient``, retrying according to
the retry policy and folding every outcome into a ``RequestResult``.
"""

from __future__ import annotations

__all__ = ["AsyncRequestExecutor"]

import asyncio
import contextlib
import logging
from typing import TYPE_CHECKING

from resthandler.result import RequestState
from resthandler.retry.decider import FailureClassifier
from resthandler.retry.executor_core import (
    ExecutionCancelledError,
    ResultTracker,
    build_wire_request,
    handle_cancellation,
    handle_exception,
    handle_response,
)
from resthandler.retry.manager import CallbackManager

if TYPE_CHECKING:
    import httpx

    from resthandler.request import RequestDescriptor
    from resthandler.result import RequestResult

logger: logging.Logger = logging.getLogger(__name__)


class AsyncRequestExecutor:
    """Executes a request asynchronously with automatic retry logic.

    The executor makes up to ``max_attempts + 1`` attempts. Each attempt
    (sending the request and reading the full body) runs inside its own
    ``asyncio.timeout`` scope when the descriptor has a timeout. The
    deadline is armed again for every attempt, so a timeout never
    shortens the following attempts. Attempts are strictly sequential and
    the execution stops at the first successful response.

    The executor suspends while sending, while reading the body and
    while waiting between attempts. It never spawns background threads.

    Attributes:
        descriptor: The request to execute.
        classifier: Classifies the exceptions raised by attempts.
        callbacks: Manager for invoking callbacks.

    Example:
        ```pycon
        >>> import asyncio
        >>> import httpx
        >>> from resthandler import RestRequest
        >>> from resthandler.retry import AsyncRequestExecutor
        >>>
        >>> async def main():
        ...     descriptor = (
        ...         RestRequest.get("https://api.example.com/data")
        ...         .set_timeout(5.0)
        ...         .set_retries(2)
        ...         .build()
        ...     )
        ...     async with httpx.AsyncClient() as client:
        ...         return await AsyncRequestExecutor(descriptor).execute(client)
        ...
        >>> asyncio.run(main())  # doctest: +SKIP

        ```
    """

    def __init__(self, descriptor: RequestDescriptor) -> None:
        self.descriptor = descriptor
        self.classifier: FailureClassifier = FailureClassifier(descriptor.timeout)
        self.callbacks: CallbackManager = CallbackManager(descriptor.callbacks)

    async def execute(
        self, client: httpx.AsyncClient, cancel_event: asyncio.Event | None = None
    ) -> RequestResult:
        """Execute the request.

        Args:
            client: The client used to send every attempt.
            cancel_event: Optional event the caller can set to stop the
                execution. It is checked before every attempt, while
                waiting between attempts, and while an attempt is in
                flight.

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
                await self._wait_before_retry(tracker, attempt, cancel_event)
            if cancel_event is not None and cancel_event.is_set():
                handle_cancellation(self.descriptor, tracker, self.callbacks)
                break
            if await self._attempt(client, tracker, attempt, max_attempts, cancel_event):
                break

        return tracker.finish()

    async def _attempt(
        self,
        client: httpx.AsyncClient,
        tracker: ResultTracker,
        attempt: int,
        max_attempts: int,
        cancel_event: asyncio.Event | None,
    ) -> bool:
        response: httpx.Response | None = None
        try:
            request = build_wire_request(client, self.descriptor)
            async with asyncio.timeout(self.descriptor.timeout):
                response = await self._send(client, request, cancel_event)
                await response.aread()
            return handle_response(
                response, self.descriptor, tracker, self.callbacks, attempt, max_attempts
            )
        except ExecutionCancelledError:
            handle_cancellation(self.descriptor, tracker, self.callbacks)
            return True
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
                await response.aclose()

    async def _send(
        self,
        client: httpx.AsyncClient,
        request: httpx.Request,
        cancel_event: asyncio.Event | None,
    ) -> httpx.Response:
        if cancel_event is None:
            return await client.send(request, stream=True)

        send_task = asyncio.ensure_future(client.send(request, stream=True))
        cancel_task = asyncio.ensure_future(cancel_event.wait())
        try:
            await asyncio.wait({send_task, cancel_task}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            for task in (send_task, cancel_task):
                if not task.done():
                    task.cancel()
            await asyncio.gather(send_task, cancel_task, return_exceptions=True)

        if send_task.cancelled():
            raise ExecutionCancelledError
        return send_task.result()

    async def _wait_before_retry(
        self, tracker: ResultTracker, attempt: int, cancel_event: asyncio.Event | None
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
            await asyncio.sleep(delay)
            return
        with contextlib.suppress(TimeoutError):
            await asyncio.wait_for(cancel_event.wait(), timeout=delay)
