"""Buffering – execution facility used for asynchronous flushes.

The buffer only needs non-blocking submission with eventual completion::

    handle = facility.submit(fn, batch)
    handle.done()

Any :class:`concurrent.futures.Executor` satisfies the protocol.
:func:`worker_pool` hands out shared thread pools; :class:`InlineExecutor`
runs work on the calling thread (handy for deterministic tests).
"""
from __future__ import annotations

import threading
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Protocol

from logthis.kernel.contracts import require_that


class Handle(Protocol):
    def done(self) -> bool: ...


class ExecutionFacility(Protocol):
    def submit(self, fn: Callable[..., Any], /, *args: Any, **kwargs: Any) -> Handle: ...


class InlineExecutor:
    """Runs submitted work immediately and returns a completed future."""

    def submit(self, fn: Callable[..., Any], /, *args: Any, **kwargs: Any) -> Future[Any]:
        future: Future[Any] = Future()
        try:
            result = fn(*args, **kwargs)
        except Exception as exc:  # noqa: BLE001
            future.set_exception(exc)
        else:
            future.set_result(result)
        return future


def is_pending(handle: Handle | None) -> bool:
    return handle is not None and not handle.done()


_pools: dict[int, ThreadPoolExecutor] = {}
_pools_lock = threading.Lock()


def worker_pool(max_workers: int = 1) -> ThreadPoolExecutor:
    """Return the shared flush pool with *max_workers* threads."""
    require_that({"max_workers must be >= 1": max_workers >= 1}, where="worker_pool")
    with _pools_lock:
        pool = _pools.get(max_workers)
        if pool is None:
            pool = ThreadPoolExecutor(
                max_workers=max_workers,
                thread_name_prefix=f"logthis-flush-{max_workers}",
            )
            _pools[max_workers] = pool
        return pool


def shutdown_worker_pools(wait: bool = True) -> None:
    with _pools_lock:
        pools = list(_pools.values())
        _pools.clear()
    for pool in pools:
        pool.shutdown(wait=wait)


__all__ = [
    "ExecutionFacility",
    "Handle",
    "InlineExecutor",
    "is_pending",
    "shutdown_worker_pools",
    "worker_pool",
]
