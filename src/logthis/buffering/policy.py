"""Buffering – flush and backpressure policies."""
from __future__ import annotations

import dataclasses
from enum import Enum

from logthis.kernel.contracts import require_that
from logthis.kernel.errors import ConfigurationError


class BackpressurePolicy(str, Enum):
    """What an enqueue does when the buffer is at ``max_queue_size``.

    ``BLOCK`` is the default: the producer hands the full queue to a flush,
    or waits for the in-flight flush to finish. The drop policies lose
    records and must be chosen explicitly; every drop is counted and logged.
    """

    BLOCK = "block"
    DROP_OLDEST = "drop_oldest"
    DROP_NEWEST = "drop_newest"

    @classmethod
    def parse(cls, value: "BackpressurePolicy | str") -> "BackpressurePolicy":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ConfigurationError(
                f"Unknown backpressure policy {value!r}; "
                f"expected one of {', '.join(p.value for p in cls)}",
                detail={"backpressure": str(value)},
            ) from None


@dataclasses.dataclass(frozen=True)
class FlushPolicy:
    """When a buffer flushes and how it behaves when full.

    ``flush_interval`` (seconds) is checked on every enqueue; there is no
    background timer. ``None`` disables the time trigger.
    """

    flush_threshold: int = 100
    max_queue_size: int = 10_000
    flush_interval: float | None = None
    backpressure: BackpressurePolicy = BackpressurePolicy.BLOCK

    def __post_init__(self) -> None:
        require_that(
            {
                "flush_threshold must be a positive integer": isinstance(self.flush_threshold, int)
                and self.flush_threshold >= 1,
                "max_queue_size must be a positive integer": isinstance(self.max_queue_size, int)
                and self.max_queue_size >= 1,
            },
            where="FlushPolicy",
        )
        require_that(
            {
                "flush_threshold must be <= max_queue_size": self.flush_threshold
                <= self.max_queue_size,
                "flush_interval must be positive or None": self.flush_interval is None
                or self.flush_interval > 0,
            },
            where="FlushPolicy",
        )
        object.__setattr__(self, "backpressure", BackpressurePolicy.parse(self.backpressure))

    def interval_elapsed(self, last_flush: float, now: float) -> bool:
        return self.flush_interval is not None and now - last_flush >= self.flush_interval


__all__ = ["BackpressurePolicy", "FlushPolicy"]
