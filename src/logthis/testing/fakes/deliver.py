"""Testing fakes – GatedDeliver: a batch deliver that blocks until released.

Lets a test hold a background flush open and observe the producer side::

    gate = GatedDeliver()
    buffer = BufferedDispatch(gate, flush_threshold=2, executor=worker_pool())
    buffer(a); buffer(b)          # returns immediately
    assert gate.started.wait(1)   # the flush is in flight
    gate.release()
"""
from __future__ import annotations

import threading
from typing import Any


class GatedDeliver:
    def __init__(
        self,
        *,
        open: bool = False,  # noqa: A002
        fail_with: Exception | None = None,
        name: str = "gated",
    ) -> None:
        self.label = name
        self.started = threading.Event()
        self._gate = threading.Event()
        if open:
            self._gate.set()
        self._fail_with = fail_with
        self._lock = threading.Lock()
        self._batches: list[list[Any]] = []
        self._threads: list[str] = []
        self._active = 0
        self.peak_concurrency = 0

    def __call__(self, batch: list[Any]) -> None:
        with self._lock:
            self._threads.append(threading.current_thread().name)
            self._active += 1
            self.peak_concurrency = max(self.peak_concurrency, self._active)
        try:
            self.started.set()
            self._gate.wait()
            if self._fail_with is not None:
                raise self._fail_with
            with self._lock:
                self._batches.append(list(batch))
        finally:
            with self._lock:
                self._active -= 1

    def release(self) -> None:
        self._gate.set()

    def hold(self) -> None:
        self._gate.clear()
        self.started.clear()

    @property
    def batches(self) -> list[list[Any]]:
        with self._lock:
            return [list(b) for b in self._batches]

    @property
    def records(self) -> list[Any]:
        return [record for batch in self.batches for record in batch]

    @property
    def threads(self) -> list[str]:
        with self._lock:
            return list(self._threads)


__all__ = ["GatedDeliver"]
