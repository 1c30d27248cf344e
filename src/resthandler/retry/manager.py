r"""Callback manager for orchestrating retry lifecycle events.

This module provides the CallbackManager class that handles invocation
of the observer callbacks registered on a request.
"""

from __future__ import annotations

__all__ = ["CallbackManager"]

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from resthandler.result import RequestResult
    from resthandler.retry.config import CallbackConfig


class CallbackManager:
    """Manages callback invocations during the execution of a request.

    Each method does nothing when the corresponding callback is not
    registered. Exceptions raised by callbacks are not caught here.

    Attributes:
        callbacks: Configuration containing the callback functions.
    """

    def __init__(self, callbacks: CallbackConfig) -> None:
        self.callbacks = callbacks

    def on_success(self, result: RequestResult) -> None:
        if self.callbacks.on_success is not None:
            self.callbacks.on_success(result)

    def on_failure(self, result: RequestResult) -> None:
        if self.callbacks.on_failure is not None:
            self.callbacks.on_failure(result)

    def on_exception(self, error: Exception) -> None:
        if self.callbacks.on_exception is not None:
            self.callbacks.on_exception(error)

    def on_retry(self, result: RequestResult, attempt: int, elapsed: float) -> None:
        """Invoke on_retry callback.

        Args:
            result: The result as it stands before the retry.
            attempt: The retry number (1-indexed).
            elapsed: Seconds elapsed since the first attempt started.
        """
        if self.callbacks.on_retry is not None:
            self.callbacks.on_retry(result, attempt, elapsed)
