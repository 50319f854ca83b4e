"""Pipeline – Receiver: a filtered, error-isolated wrapper around one sink.

A receiver runs its own middleware, then its own ``[lower, upper]`` filter,
then the sink. The logger filters first, so an event may pass the logger and
still be dropped at a stricter receiver. Whatever the sink raises leaves the
receiver as a single :class:`ReceiverError`; the receiver itself always
returns ``None``.
"""
from __future__ import annotations

import dataclasses
from collections.abc import Callable
from typing import Any

from logthis.events import HIGHEST, LOWEST, Event, EventLevel, resolve_severity
from logthis.kernel.contracts import require_that
from logthis.kernel.errors import ContractViolation, ReceiverError
from logthis.pipeline.middleware import (
    Middleware,
    Sink,
    apply_middleware,
    describe,
    validate_single_argument,
)


def _validate_limits(lower: int, upper: int, where: str) -> None:
    require_that(
        {
            "lower must be in [0, 99]": 0 <= lower <= 99,
            "upper must be in [1, 100]": 1 <= upper <= 100,
            "lower must be <= upper": lower <= upper,
        },
        where=where,
    )


@dataclasses.dataclass(frozen=True)
class Receiver:
    sink: Sink
    middleware: tuple[Middleware, ...] = ()
    lower: int = LOWEST.severity
    upper: int = HIGHEST.severity
    name: str | None = None

    def __post_init__(self) -> None:
        validate_single_argument(self.sink, "receiver sink")
        object.__setattr__(self, "lower", resolve_severity(self.lower))
        object.__setattr__(self, "upper", resolve_severity(self.upper))
        _validate_limits(self.lower, self.upper, "Receiver")

    def __call__(self, event: Event) -> None:
        try:
            current = apply_middleware(self.middleware, event)
            if current is None or not self.accepts(current):
                return None
            self.sink(current)
        except (ContractViolation, ReceiverError):
            raise
        except Exception as exc:  # noqa: BLE001
            raise ReceiverError.wrap(exc, name=self.name, label=self.label) from exc
        return None

    def accepts(self, event: Event) -> bool:
        return self.lower <= event.severity <= self.upper

    @property
    def label(self) -> str:
        return self.name or describe(self.sink)

    # ------------------------------------------------------------------
    # Buffered sinks
    # ------------------------------------------------------------------

    @property
    def flushable(self) -> bool:
        return callable(getattr(self.sink, "flush", None))

    def flush(self) -> None:
        """Drain the sink's buffer, if it has one."""
        if self.flushable:
            self.sink.flush()  # type: ignore[attr-defined]

    @property
    def buffer_size(self) -> int | None:
        """Records waiting in the sink's buffer, or ``None`` if unbuffered."""
        size = getattr(self.sink, "buffer_size", None)
        return size if isinstance(size, int) else None

    # ------------------------------------------------------------------
    # Builders
    # ------------------------------------------------------------------

    def with_limits(
        self,
        lower: int | EventLevel | str | None = None,
        upper: int | EventLevel | str | None = None,
    ) -> "Receiver":
        new_lower = self.lower if lower is None else resolve_severity(lower)
        new_upper = self.upper if upper is None else resolve_severity(upper)
        _validate_limits(new_lower, new_upper, "Receiver.with_limits")
        return dataclasses.replace(self, lower=new_lower, upper=new_upper)

    def with_middleware(self, *fns: Middleware) -> "Receiver":
        for fn in fns:
            validate_single_argument(fn, "middleware")
        return dataclasses.replace(self, middleware=self.middleware + fns)

    def named(self, name: str) -> "Receiver":
        require_that(
            {"name must be a non-empty string": isinstance(name, str) and bool(name)},
            where="Receiver.named",
        )
        return dataclasses.replace(self, name=name)


def receiver(
    sink: Sink | Receiver,
    *,
    name: str | None = None,
    lower: int | EventLevel | str = LOWEST,
    upper: int | EventLevel | str = HIGHEST,
) -> Receiver:
    """Wrap a one-argument *sink* into a :class:`Receiver`."""
    if isinstance(sink, Receiver):
        result = sink if name is None else sink.named(name)
        if lower is LOWEST and upper is HIGHEST:
            return result
        return result.with_limits(lower, upper)
    return Receiver(
        sink=sink,
        lower=resolve_severity(lower),
        upper=resolve_severity(upper),
        name=name,
    )


@dataclasses.dataclass(frozen=True)
class FormattedSink:
    """Sink built from a pure ``format`` step and a ``deliver`` step."""

    format: Callable[[Event], Any]
    deliver: Callable[[Any], Any]

    def __call__(self, event: Event) -> None:
        self.deliver(self.format(event))

    @property
    def label(self) -> str:
        return f"{describe(self.format)} -> {describe(self.deliver)}"


def compose(
    format: Callable[[Event], Any],  # noqa: A002
    deliver: Callable[[Any], Any],
    *,
    name: str | None = None,
) -> Receiver:
    """Build a receiver that formats each event and hands the record to *deliver*."""
    validate_single_argument(format, "format")
    validate_single_argument(deliver, "deliver")
    return receiver(FormattedSink(format=format, deliver=deliver), name=name)


__all__ = ["FormattedSink", "Receiver", "compose", "receiver"]
