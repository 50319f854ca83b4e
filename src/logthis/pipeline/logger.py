"""Pipeline – Logger: the orchestrator that filters, tags and fans out events.

A :class:`Logger` is an immutable value. Builders return new loggers that
share the unchanged tuples with the original::

    log = (
        logger()
        .with_limits(lower=NOTE)
        .with_tags("billing")
        .with_receivers(audit_trail, console=print_line)
    )
    log(WARNING("card declined", order_id=42))

Calling a logger with an event:

1. runs the logger middleware in registration order (exceptions propagate;
   a middleware returning ``None`` drops the event and the call returns
   ``None``);
2. returns the event untouched when its severity is outside
   ``[lower, upper]``;
3. merges the logger tags after the event's own tags;
4. invokes every receiver sequentially in registration order, each inside an
   isolation boundary that turns failures into diagnostics;
5. returns the tagged event.
"""
from __future__ import annotations

import dataclasses
import warnings
from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING, Any

from logthis.events import HIGHEST, LOWEST, Event, EventLevel, merge_tags, resolve_severity
from logthis.kernel.contracts import ensure_that, require_that
from logthis.kernel.errors import ConfigurationError, ContractViolation, ReceiverError
from logthis.observability.diagnostics import report_flush_failure, report_receiver_failure
from logthis.pipeline.middleware import Middleware, apply_middleware, validate_single_argument
from logthis.pipeline.receiver import Receiver, receiver

if TYPE_CHECKING:
    from logthis.config.settings import LogthisSettings

ReceiverKey = int | str


@dataclasses.dataclass(frozen=True)
class Logger:
    middleware: tuple[Middleware, ...] = ()
    lower: int = LOWEST.severity
    upper: int = HIGHEST.severity
    tags: tuple[str, ...] = ()
    receivers: tuple[Receiver, ...] = ()
    labels: tuple[str, ...] = ()
    names: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        # levels and level names are accepted wherever a bound is
        object.__setattr__(self, "lower", resolve_severity(self.lower))
        object.__setattr__(self, "upper", resolve_severity(self.upper))
        require_that(
            {
                "lower must be in [0, 99]": 0 <= self.lower <= 99,
                "upper must be in [1, 100]": 1 <= self.upper <= 100,
                "lower must be <= upper": self.lower <= self.upper,
                "tags must be strings": all(isinstance(t, str) for t in self.tags),
            },
            where="Logger",
        )
        require_that(
            {
                "receivers and labels match length": len(self.receivers) == len(self.labels),
                "receivers and names match length": len(self.receivers) == len(self.names),
                "receiver names are unique": len(set(self.names)) == len(self.names),
            },
            where="Logger",
        )

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def __call__(self, event: Event) -> Event | None:
        require_that({"event must be an Event": isinstance(event, Event)}, where="Logger")
        transformed = apply_middleware(self.middleware, event)
        if transformed is None:
            return None
        event = transformed

        if not self.lower <= event.severity <= self.upper:
            return event

        if self.tags:
            event = event.with_tags(*self.tags)

        for index, (recv, name, label) in enumerate(zip(self.receivers, self.names, self.labels)):
            try:
                recv(event)
            except ContractViolation:
                raise
            except ReceiverError as exc:
                report_receiver_failure(exc.locate(name=name, index=index, label=label))
            except Exception as exc:  # noqa: BLE001
                report_receiver_failure(
                    ReceiverError.wrap(exc, name=name, index=index, label=label)
                )
        return event

    # ------------------------------------------------------------------
    # Builders
    # ------------------------------------------------------------------

    def with_receivers(
        self,
        *receivers: Receiver | Any,
        append: bool = True,
        **named: Receiver | Any,
    ) -> "Logger":
        """Add receivers (or replace them when ``append=False``).

        Plain one-argument callables are wrapped with :func:`receiver`.
        Keyword arguments name their receiver; other receivers keep their
        own name or get ``receiver_<n>``. Clashing names get ``_2``, ``_3``…
        """
        require_that({"append must be a bool": isinstance(append, bool)}, where="Logger.with_receivers")
        if not receivers and not named:
            warnings.warn("with_receivers() called without receivers", UserWarning, stacklevel=2)

        entries: list[tuple[str | None, Receiver]] = []
        for item in receivers:
            recv = self._as_receiver(item)
            entries.append((recv.name, recv))
        for key, item in named.items():
            entries.append((key, self._as_receiver(item)))

        existing_count = len(self.receivers) if append else 0
        taken: set[str] = set(self.names) if append else set()
        new_names: list[str] = []
        for offset, (wanted, _) in enumerate(entries, start=1):
            base = wanted or f"receiver_{existing_count + offset}"
            candidate, suffix = base, 2
            while candidate in taken:
                candidate = f"{base}_{suffix}"
                suffix += 1
            taken.add(candidate)
            new_names.append(candidate)

        new_receivers = tuple(recv for _, recv in entries)
        new_labels = tuple(recv.label for recv in new_receivers)
        if append:
            result = dataclasses.replace(
                self,
                receivers=self.receivers + new_receivers,
                labels=self.labels + new_labels,
                names=self.names + tuple(new_names),
            )
        else:
            result = dataclasses.replace(
                self,
                receivers=new_receivers,
                labels=new_labels,
                names=tuple(new_names),
            )
        ensure_that(
            {
                "receiver count grew by the number added": len(result.receivers)
                == existing_count + len(entries),
            },
            where="Logger.with_receivers",
        )
        return result

    def with_limits(
        self,
        lower: int | EventLevel | str | None = None,
        upper: int | EventLevel | str | None = None,
    ) -> "Logger":
        """Set the inclusive severity range; ``None`` keeps the current bound."""
        new_lower = self.lower if lower is None else resolve_severity(lower)
        new_upper = self.upper if upper is None else resolve_severity(upper)
        require_that(
            {
                "lower must be in [0, 99]": 0 <= new_lower <= 99,
                "upper must be in [1, 100]": 1 <= new_upper <= 100,
                "lower must be <= upper": new_lower <= new_upper,
            },
            where="Logger.with_limits",
        )
        return dataclasses.replace(self, lower=new_lower, upper=new_upper)

    def with_tags(self, *tags: str, append: bool = True) -> "Logger":
        require_that(
            {
                "tags must be strings": all(isinstance(t, str) for t in tags),
                "append must be a bool": isinstance(append, bool),
            },
            where="Logger.with_tags",
        )
        if not tags:
            warnings.warn("with_tags() called without tags", UserWarning, stacklevel=2)
            return self
        combined = merge_tags(self.tags, tags) if append else merge_tags((), tags)
        return dataclasses.replace(self, tags=combined)

    def with_middleware(self, *fns: Middleware) -> "Logger":
        for fn in fns:
            validate_single_argument(fn, "middleware")
        return dataclasses.replace(self, middleware=self.middleware + tuple(fns))

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def receiver(self, key: ReceiverKey) -> Receiver:
        """Look a receiver up by name or zero-based index."""
        return self.receivers[self._index_of(key)]

    def _index_of(self, key: ReceiverKey) -> int:
        if isinstance(key, str):
            try:
                return self.names.index(key)
            except ValueError:
                raise ConfigurationError(
                    f"Receiver '{key}' not found. Available: {', '.join(self.names) or '<none>'}",
                    detail={"receiver": key},
                ) from None
        if isinstance(key, int) and not isinstance(key, bool):
            if not 0 <= key < len(self.receivers):
                raise ConfigurationError(
                    f"Receiver index out of bounds: {key} (size: {len(self.receivers)})",
                    detail={"receiver": key},
                )
            return key
        raise ConfigurationError("Receiver key must be a name (str) or an index (int)")

    def __repr__(self) -> str:
        receivers = ", ".join(f"{n}={lbl}" for n, lbl in zip(self.names, self.labels))
        return (
            f"{type(self).__name__}(limits=[{self.lower}, {self.upper}], "
            f"tags={list(self.tags)}, middleware={len(self.middleware)}, "
            f"receivers=[{receivers}])"
        )

    @staticmethod
    def _as_receiver(item: Any) -> Receiver:
        if isinstance(item, Receiver):
            return item
        if not callable(item):
            raise ConfigurationError(
                f"Receivers must be Receiver instances or one-argument callables, "
                f"got {type(item).__name__}",
            )
        return receiver(item)


class VoidLogger(Logger):
    """A logger that discards every event and returns it unchanged."""

    def __call__(self, event: Event) -> Event | None:
        return event


def logger() -> Logger:
    """Return an empty logger: no receivers, limits [0, 100], no tags."""
    result = Logger()
    ensure_that(
        {
            "limits are [0, 100]": (result.lower, result.upper) == (0, 100),
            "no receivers": not result.receivers,
        },
        where="logger",
    )
    return result


def void_logger() -> Logger:
    return VoidLogger()


def logger_from_settings(settings: "LogthisSettings") -> Logger:
    """Empty logger with limits taken from *settings*."""
    return logger().with_limits(lower=settings.lower, upper=settings.upper)


def get_receiver(target: Logger, key: ReceiverKey = 0) -> Receiver:
    return target.receiver(key)


def flush(target: Any, receivers: Sequence[ReceiverKey] | ReceiverKey | None = None) -> int:
    """Drain buffered sinks; returns how many were flushed.

    *target* may be a :class:`Logger` (optionally restricted to some
    *receivers* by name or index), a :class:`Receiver` or any object with a
    ``flush()`` method. Flush failures on a logger's receivers are reported as
    :class:`~logthis.observability.FlushFailureWarning` and do not stop the
    remaining receivers.
    """
    if not isinstance(target, Logger):
        flush_fn = getattr(target, "flush", None)
        require_that({"target must be a Logger or have flush()": callable(flush_fn)}, where="flush")
        flush_fn()
        return 1

    if receivers is None:
        indices: Iterable[int] = range(len(target.receivers))
    elif isinstance(receivers, (str, int)):
        indices = [target._index_of(receivers)]
    else:
        indices = [target._index_of(key) for key in receivers]

    flushed = 0
    for index in indices:
        recv = target.receivers[index]
        if not recv.flushable:
            continue
        try:
            recv.flush()
            flushed += 1
        except Exception as exc:  # noqa: BLE001
            report_flush_failure(target.names[index], exc)
    return flushed


def buffer_status(target: Logger) -> dict[str, int | None]:
    """Records waiting per receiver name; ``None`` for unbuffered receivers."""
    return {name: recv.buffer_size for name, recv in zip(target.names, target.receivers)}


__all__ = [
    "Logger",
    "VoidLogger",
    "buffer_status",
    "flush",
    "get_receiver",
    "logger",
    "logger_from_settings",
    "void_logger",
]
