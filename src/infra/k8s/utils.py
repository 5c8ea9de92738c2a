"""Helpers for calling the async controllers from synchronous code."""

from __future__ import annotations

import asyncio
import concurrent.futures
from collections.abc import Coroutine
from typing import Any, TypeVar

T = TypeVar("T")


def run_sync(coro: Coroutine[Any, Any, T]) -> T:
    """Run ``coro`` to completion and return its result.

    Outside an event loop this is ``asyncio.run``. When a loop is already
    running in this thread (e.g. under an async test runner), the coroutine
    gets its own loop on a worker thread instead.

    Example:
        from src.infra.k8s import KubectlController, run_sync

        exists = run_sync(KubectlController().namespace_exists("observability"))
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)

    with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
        return pool.submit(asyncio.run, coro).result()
