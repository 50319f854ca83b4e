"""Pipeline – built-in middleware.

Each factory returns a one-argument transform usable with
``Logger.with_middleware`` or ``Receiver.with_middleware``. Transforms that
return ``None`` drop the event.
"""
from __future__ import annotations

import random
import threading
from typing import Any

from logthis.events import WARNING, Event, EventLevel, resolve_severity
from logthis.kernel.contracts import require_that
from logthis.kernel.time import Clock, SystemClock
from logthis.observability.logging.filters import SensitiveFieldsFilter
from logthis.pipeline.middleware import Middleware


def add_context(**fields: Any) -> Middleware:
    """Add static *fields* to every event, without overriding event fields."""

    def _add_context(event: Event) -> Event:
        missing = {k: v for k, v in fields.items() if k not in event.fields}
        return event.with_fields(**missing) if missing else event

    return _add_context


def redact_fields(*keys: str) -> Middleware:
    """Replace sensitive field values with ``[REDACTED]``.

    With no *keys* the default sensitive set (password, token, api_key, …)
    is used. Nested mappings are redacted recursively.
    """
    _filter = SensitiveFieldsFilter(frozenset(keys) if keys else None)

    def _redact_fields(event: Event) -> Event:
        return event.with_fields(**_filter.redact_deep(event.fields))

    return _redact_fields


def redact_patterns() -> Middleware:
    """Mask card numbers, SSNs and email local parts in the message."""

    def _redact_patterns(event: Event) -> Event:
        redacted = SensitiveFieldsFilter.redact_text(event.message)
        return event if redacted == event.message else event.with_message(redacted)

    return _redact_patterns


def sample_events(
    rate: float,
    *,
    keep_at_or_above: int | EventLevel | str = WARNING,
    rng: random.Random | None = None,
) -> Middleware:
    """Keep roughly *rate* of the events below *keep_at_or_above*.

    Events at or above the threshold always pass. Kept events are marked
    with ``sampled=True`` and ``sample_rate``.
    """
    require_that({"rate must be in [0, 1]": 0.0 <= rate <= 1.0}, where="sample_events")
    threshold = resolve_severity(keep_at_or_above)
    _rng = rng or random.Random()

    def _sample_events(event: Event) -> Event | None:
        if event.severity >= threshold:
            return event
        if _rng.random() >= rate:
            return None
        return event.with_fields(sampled=True, sample_rate=rate)

    return _sample_events


def rate_limit(max_per_second: float, *, clock: Clock | None = None) -> Middleware:
    """Token bucket: drop events beyond *max_per_second* (burst = one second)."""
    require_that({"max_per_second must be > 0": max_per_second > 0}, where="rate_limit")
    _clock = clock or SystemClock()
    lock = threading.Lock()
    state = {"tokens": float(max_per_second), "last": _clock.timestamp()}

    def _rate_limit(event: Event) -> Event | None:
        with lock:
            now = _clock.timestamp()
            elapsed = max(0.0, now - state["last"])
            state["tokens"] = min(float(max_per_second), state["tokens"] + elapsed * max_per_second)
            state["last"] = now
            if state["tokens"] < 1.0:
                return None
            state["tokens"] -= 1.0
        return event

    return _rate_limit


def add_timing(*, clock: Clock | None = None) -> Middleware:
    """Stamp ``elapsed_ms`` measured from the moment the middleware was built."""
    _clock = clock or SystemClock()
    origin = _clock.timestamp()

    def _add_timing(event: Event) -> Event:
        return event.with_fields(elapsed_ms=round((_clock.timestamp() - origin) * 1000, 3))

    return _add_timing


__all__ = [
    "add_context",
    "add_timing",
    "rate_limit",
    "redact_fields",
    "redact_patterns",
    "sample_events",
]
