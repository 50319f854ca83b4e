"""Buffering – registry of live buffered sinks and the shutdown entry point.

Every :class:`~logthis.buffering.dispatch.BufferedDispatch` registers itself
on construction and stays referenced until it is closed, so a buffer with
pending records can never be garbage-collected unflushed. The host
application calls :func:`shutdown` (or installs it with
:func:`install_exit_hook`) to drain them all before exiting.
"""
from __future__ import annotations

import atexit
import threading
from typing import Protocol

from logthis.observability.logging.processors import get_logger

_log = get_logger(__name__)


class Drainable(Protocol):
    name: str

    def close(self, timeout: float | None = None) -> None: ...


class BufferRegistry:
    """Strong references to every buffer that has not been closed yet."""

    def __init__(self) -> None:
        self._buffers: dict[int, Drainable] = {}
        self._lock = threading.Lock()

    def register(self, buffer: Drainable) -> None:
        with self._lock:
            self._buffers[id(buffer)] = buffer

    def unregister(self, buffer: Drainable) -> None:
        with self._lock:
            self._buffers.pop(id(buffer), None)

    def live(self) -> list[Drainable]:
        with self._lock:
            return list(self._buffers.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._buffers)

    def drain_all(self, timeout: float | None = None) -> int:
        """Close every live buffer synchronously; returns how many were drained.

        A buffer that fails to drain is logged and the others still run.
        """
        drained = 0
        for buffer in self.live():
            try:
                buffer.close(timeout=timeout)
                drained += 1
            except Exception as exc:  # noqa: BLE001
                _log.error("buffer.drain_failed", sink=buffer.name, error=str(exc))
            finally:
                self.unregister(buffer)
        return drained


default_registry = BufferRegistry()

_hook_lock = threading.Lock()
_hooked: set[int] = set()


def shutdown(registry: BufferRegistry | None = None, timeout: float | None = None) -> int:
    """Drain every live buffered sink. Call once before the process exits."""
    target = registry if registry is not None else default_registry
    drained = target.drain_all(timeout=timeout)
    if drained:
        _log.debug("buffer.shutdown", drained=drained)
    return drained


def install_exit_hook(registry: BufferRegistry | None = None) -> None:
    """Register :func:`shutdown` with :mod:`atexit` (idempotent per registry)."""
    target = registry if registry is not None else default_registry
    with _hook_lock:
        if id(target) in _hooked:
            return
        _hooked.add(id(target))
    atexit.register(shutdown, target)


__all__ = ["BufferRegistry", "Drainable", "default_registry", "install_exit_hook", "shutdown"]
