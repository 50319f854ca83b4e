"""Buffering – BufferedDispatch: batching and asynchronous delivery for a sink.

Records accumulate in an ordered queue and are delivered in batches::

    buffer = BufferedDispatch(write_rows, format=to_row, flush_threshold=500,
                              executor=worker_pool())
    log = logger().with_receivers(warehouse=buffer)

A flush is triggered when the queue reaches ``flush_threshold``, when
``flush_interval`` seconds have passed since the previous flush (checked on
every enqueue), or explicitly through :meth:`BufferedDispatch.flush`.

Without an executor the batch is delivered on the caller's thread and a
delivery error propagates to the caller. With an executor the batch is
submitted and the enqueue returns at once; a failed background delivery is
recorded as :class:`~logthis.kernel.errors.AsyncDeliveryError` and logged,
never raised on the producer's stack. A failed batch is not re-queued.

At most one flush is in flight per buffer. Records arriving meanwhile start
a new batch; when the flight finishes and that batch has reached the
threshold, the same worker delivers it next. Batches are formed in arrival
order. Completion order across different buffers is unordered.

When the queue is at ``max_queue_size`` the backpressure policy applies
(see :class:`~logthis.buffering.policy.BackpressurePolicy`).
"""
from __future__ import annotations

import dataclasses
import threading
from collections import deque
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from logthis.buffering.executor import ExecutionFacility, Handle, is_pending, worker_pool
from logthis.buffering.policy import BackpressurePolicy, FlushPolicy
from logthis.buffering.registry import BufferRegistry, default_registry
from logthis.events import HIGHEST, LOWEST, Event, EventLevel
from logthis.kernel.errors import AsyncDeliveryError, BufferClosedError
from logthis.kernel.time import Clock, SystemClock
from logthis.observability.diagnostics import report_delivery_failure
from logthis.observability.logging.processors import get_logger
from logthis.pipeline.middleware import describe, validate_single_argument
from logthis.pipeline.receiver import Receiver, receiver

if TYPE_CHECKING:
    from logthis.config.settings import LogthisSettings

_log = get_logger(__name__)

Deliver = Callable[[list[Any]], Any]


@dataclasses.dataclass(frozen=True)
class BufferStats:
    """Point-in-time counters of one buffer."""

    enqueued: int
    buffered: int
    in_flight: bool
    batches_formed: int
    delivered_batches: int
    delivered_records: int
    failed_batches: int
    failed_records: int
    dropped: int
    blocked: int


class BufferedDispatch:
    """Batching, optionally asynchronous, wrapper around a ``deliver`` call.

    Instances are one-argument sinks (``buffer(event)`` enqueues) and can be
    passed straight to :func:`~logthis.pipeline.receiver.receiver` or
    ``Logger.with_receivers``.
    """

    def __init__(
        self,
        deliver: Deliver,
        *,
        format: Callable[[Event], Any] | None = None,  # noqa: A002
        flush_threshold: int = 100,
        max_queue_size: int = 10_000,
        flush_interval: float | None = None,
        backpressure: BackpressurePolicy | str = BackpressurePolicy.BLOCK,
        executor: ExecutionFacility | None = None,
        clock: Clock | None = None,
        name: str | None = None,
        registry: BufferRegistry | None = None,
    ) -> None:
        validate_single_argument(deliver, "deliver")
        if format is not None:
            validate_single_argument(format, "format")
        self.policy = FlushPolicy(
            flush_threshold=flush_threshold,
            max_queue_size=max_queue_size,
            flush_interval=flush_interval,
            backpressure=BackpressurePolicy.parse(backpressure),
        )
        self.name = name or describe(deliver)
        self._deliver = deliver
        self._format = format
        self._executor = executor
        self._clock = clock or SystemClock()

        self._cond = threading.Condition()
        self._queue: deque[Any] = deque()
        self._in_flight = False
        self._handle: Handle | None = None
        self._closed = False
        self._last_flush = self._clock.timestamp()

        self._enqueued = 0
        self._batches_formed = 0
        self._delivered_batches = 0
        self._delivered_records = 0
        self._failed_batches = 0
        self._failed_records = 0
        self._dropped = 0
        self._blocked = 0
        self.last_error: AsyncDeliveryError | None = None

        self._registry = registry if registry is not None else default_registry
        self._registry.register(self)

    @classmethod
    def from_settings(
        cls,
        deliver: Deliver,
        settings: "LogthisSettings",
        *,
        format: Callable[[Event], Any] | None = None,  # noqa: A002
        name: str | None = None,
        clock: Clock | None = None,
        registry: BufferRegistry | None = None,
    ) -> "BufferedDispatch":
        executor = worker_pool(settings.async_workers) if settings.async_workers > 0 else None
        return cls(
            deliver,
            format=format,
            flush_threshold=settings.flush_threshold,
            max_queue_size=settings.max_queue_size,
            flush_interval=settings.flush_interval or None,
            backpressure=settings.backpressure,
            executor=executor,
            clock=clock,
            name=name,
            registry=registry,
        )

    # ------------------------------------------------------------------
    # Sink interface
    # ------------------------------------------------------------------

    def __call__(self, event: Event) -> None:
        self.enqueue(event)

    def enqueue(self, event: Event) -> None:
        """Queue *event* (formatted first, if a formatter is set).

        Blocks only under the ``BLOCK`` backpressure policy while the queue
        is full and a flush is in flight.
        """
        record = self._format(event) if self._format is not None else event
        while True:
            with self._cond:
                if self._closed:
                    raise BufferClosedError(self.name)
                if len(self._queue) < self.policy.max_queue_size:
                    self._queue.append(record)
                    self._enqueued += 1
                    batch = self._take_batch() if self._flush_due() else None
                    break
                policy = self.policy.backpressure
                if policy is BackpressurePolicy.DROP_NEWEST:
                    self._record_drop(policy)
                    return
                if policy is BackpressurePolicy.DROP_OLDEST:
                    self._queue.popleft()
                    self._record_drop(policy)
                    continue
                self._blocked += 1
                forced = self._take_batch()
                if forced is None:
                    self._cond.wait_for(self._has_room_or_idle)
                    continue
            self._dispatch(forced)
        if batch is not None:
            self._dispatch(batch)

    # ------------------------------------------------------------------
    # Flushing
    # ------------------------------------------------------------------

    def flush(self, wait: bool = True) -> None:
        """Hand the current queue to ``deliver``.

        With ``wait=True`` the call first lets an in-flight flush finish and
        then waits for this one, so the caller observes the write. With
        ``wait=False`` on a busy buffer, records keep accumulating.
        """
        with self._cond:
            if wait:
                self._cond.wait_for(lambda: not self._in_flight)
            batch = self._take_batch()
        if batch is not None:
            self._dispatch(batch)
        if wait:
            self.wait()

    def wait(self, timeout: float | None = None) -> bool:
        """Block until no flush is in flight; ``False`` on timeout."""
        with self._cond:
            return self._cond.wait_for(lambda: not self._in_flight, timeout)

    def close(self, timeout: float | None = None) -> None:
        """Wait for the in-flight flush, then drain the rest on this thread.

        An in-flight flush cannot be cancelled. If it outlives *timeout* the
        buffer is closed at once and the flush that still holds the slot
        delivers the remainder after its own batch, so deliveries never
        overlap. Closing twice is a no-op.
        """
        with self._cond:
            if self._closed:
                return
            idle = self._cond.wait_for(lambda: not self._in_flight, timeout)
            self._closed = True
            batch = None
            if not idle:
                _log.warning(
                    "buffer.close_timeout",
                    sink=self.name,
                    timeout=timeout,
                    handed_over=len(self._queue),
                )
            elif self._queue:
                self._in_flight = True
                batch = self._form_batch()
            self._cond.notify_all()
        try:
            if batch is not None:
                self._deliver_now(batch)
        finally:
            self._registry.unregister(self)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def label(self) -> str:
        return f"buffered({self.name})"

    @property
    def buffer_size(self) -> int:
        with self._cond:
            return len(self._queue)

    @property
    def in_flight(self) -> bool:
        with self._cond:
            return self._in_flight

    @property
    def pending(self) -> bool:
        """Whether the last submitted background flush has not completed."""
        return is_pending(self._handle)

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def asynchronous(self) -> bool:
        return self._executor is not None

    def stats(self) -> BufferStats:
        with self._cond:
            return BufferStats(
                enqueued=self._enqueued,
                buffered=len(self._queue),
                in_flight=self._in_flight,
                batches_formed=self._batches_formed,
                delivered_batches=self._delivered_batches,
                delivered_records=self._delivered_records,
                failed_batches=self._failed_batches,
                failed_records=self._failed_records,
                dropped=self._dropped,
                blocked=self._blocked,
            )

    def __repr__(self) -> str:
        mode = "async" if self.asynchronous else "sync"
        return (
            f"BufferedDispatch(name={self.name!r}, mode={mode}, "
            f"threshold={self.policy.flush_threshold}, buffered={len(self._queue)})"
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _flush_due(self) -> bool:
        # lock held
        if len(self._queue) >= self.policy.flush_threshold:
            return True
        return self.policy.interval_elapsed(self._last_flush, self._clock.timestamp())

    def _has_room_or_idle(self) -> bool:
        # lock held
        return self._closed or not self._in_flight or len(self._queue) < self.policy.max_queue_size

    def _take_batch(self) -> list[Any] | None:
        # lock held
        if self._in_flight or not self._queue:
            return None
        self._in_flight = True
        return self._form_batch()

    def _form_batch(self) -> list[Any]:
        # lock held; caller owns the in-flight slot
        batch = list(self._queue)
        self._queue.clear()
        self._last_flush = self._clock.timestamp()
        self._batches_formed += 1
        return batch

    def _record_drop(self, policy: BackpressurePolicy) -> None:
        # lock held
        self._dropped += 1
        _log.warning(
            "buffer.dropped",
            sink=self.name,
            policy=policy.value,
            dropped_total=self._dropped,
            max_queue_size=self.policy.max_queue_size,
        )

    def _dispatch(self, batch: list[Any]) -> None:
        if self._executor is None:
            self._deliver_now(batch)
            return
        try:
            handle = self._executor.submit(self._drain_in_background, batch)
        except RuntimeError as exc:
            # executor already shut down: deliver here rather than lose the batch
            _log.warning("buffer.submit_failed", sink=self.name, error=str(exc))
            self._deliver_now(batch)
            return
        self._handle = handle

    def _next_batch(self, *, chain: bool) -> list[Any] | None:
        # lock held; releases the in-flight slot when nothing is left to send
        if self._queue and (
            self._closed or (chain and len(self._queue) >= self.policy.flush_threshold)
        ):
            return self._form_batch()
        self._in_flight = False
        return None

    def _deliver_now(self, batch: list[Any]) -> None:
        # caller owns the in-flight slot; the first failure is re-raised
        current: list[Any] | None = batch
        first_error: Exception | None = None
        while current is not None:
            try:
                self._deliver(current)
            except Exception as exc:
                failure = self._record_failure(current, exc)
                if first_error is None:
                    first_error = exc
                else:
                    report_delivery_failure(failure)
            else:
                self._record_success(current)
            finally:
                with self._cond:
                    current = self._next_batch(chain=False)
                    self._cond.notify_all()
        if first_error is not None:
            raise first_error

    def _drain_in_background(self, batch: list[Any]) -> None:
        current: list[Any] | None = batch
        while current is not None:
            try:
                self._deliver(current)
            except Exception as exc:  # noqa: BLE001
                report_delivery_failure(self._record_failure(current, exc))
            else:
                self._record_success(current)
            with self._cond:
                current = self._next_batch(chain=True)
                self._cond.notify_all()

    def _record_success(self, batch: list[Any]) -> None:
        with self._cond:
            self._delivered_batches += 1
            self._delivered_records += len(batch)

    def _record_failure(self, batch: list[Any], exc: Exception) -> AsyncDeliveryError:
        error = AsyncDeliveryError(
            f"Delivery of {len(batch)} record(s) to '{self.name}' failed: {exc}",
            sink=self.name,
            batch_size=len(batch),
            cause=exc,
        )
        with self._cond:
            self._failed_batches += 1
            self._failed_records += len(batch)
            self.last_error = error
        return error


def buffered(
    deliver: Deliver,
    *,
    format: Callable[[Event], Any] | None = None,  # noqa: A002
    name: str | None = None,
    lower: int | EventLevel | str = LOWEST,
    upper: int | EventLevel | str = HIGHEST,
    **options: Any,
) -> Receiver:
    """Receiver whose sink is a :class:`BufferedDispatch` over *deliver*."""
    dispatch = BufferedDispatch(deliver, format=format, name=name, **options)
    return receiver(dispatch, name=name, lower=lower, upper=upper)


__all__ = ["BufferStats", "BufferedDispatch", "buffered"]
