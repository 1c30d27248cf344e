r"""Retry package implementing the request execution engine.

This package turns a request descriptor and its retry policy into a
bounded sequence of attempts and folds every outcome into a single
``RequestResult``.

Public API:
    - RetryPolicy: Maximum number of retries and delay function
    - CallbackConfig: Observer callbacks of a request
    - CallbackManager: Manager for callback invocations
    - FailureClassifier: Classification of the exceptions raised by attempts
    - RequestExecutor: Synchronous executor
    - AsyncRequestExecutor: Asynchronous executor
"""

from __future__ import annotations

__all__ = [
    "AsyncRequestExecutor",
    "CallbackConfig",
    "CallbackManager",
    "FailureClassifier",
    "RequestExecutor",
    "RetryPolicy",
]

from resthandler.retry.config import CallbackConfig, RetryPolicy
from resthandler.retry.decider import FailureClassifier
from resthandler.retry.executor import RequestExecutor
from resthandler.retry.executor_async import AsyncRequestExecutor
from resthandler.retry.manager import CallbackManager
