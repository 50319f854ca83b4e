"""Pipeline – middleware type and the single-argument callable check."""
from __future__ import annotations

import inspect
from collections.abc import Callable, Iterable
from typing import Any

from logthis.events import Event
from logthis.kernel.errors import ConfigurationError

Middleware = Callable[[Event], Event | None]
Sink = Callable[[Event], Any]


def describe(fn: Any) -> str:
    """Short human label for a callable, used in diagnostics."""
    label = getattr(fn, "label", None)
    if isinstance(label, str):
        return label
    name = getattr(fn, "__qualname__", None) or getattr(fn, "__name__", None)
    if name:
        return name
    return type(fn).__name__


def validate_single_argument(fn: Any, what: str) -> None:
    """Raise :class:`ConfigurationError` unless *fn* takes exactly one argument.

    Callables whose signature cannot be introspected (some builtins) are
    accepted as-is.
    """
    if not callable(fn):
        raise ConfigurationError(
            f"{what} must be callable, got {type(fn).__name__}",
            detail={"what": what},
        )
    try:
        params = list(inspect.signature(fn).parameters.values())
    except (TypeError, ValueError):
        return
    if len(params) != 1 or params[0].kind in (
        inspect.Parameter.VAR_POSITIONAL,
        inspect.Parameter.VAR_KEYWORD,
        inspect.Parameter.KEYWORD_ONLY,
    ):
        raise ConfigurationError(
            f"{what} must take exactly one argument (the event), "
            f"got {len(params)}: {describe(fn)}",
            detail={"what": what, "parameters": [p.name for p in params]},
        )


def middleware(fn: Middleware) -> Middleware:
    """Validate *fn* as an event transform and return it unchanged.

    A middleware receives an :class:`Event` and returns the (possibly new)
    event, or ``None`` to drop it.
    """
    validate_single_argument(fn, "middleware")
    return fn


def apply_middleware(chain: Iterable[Middleware], event: Event) -> Event | None:
    """Run *event* through *chain* in order; ``None`` short-circuits."""
    current: Event | None = event
    for transform in chain:
        current = transform(current)  # type: ignore[arg-type]
        if current is None:
            return None
        if not isinstance(current, Event):
            raise ConfigurationError(
                f"middleware {describe(transform)} returned {type(current).__name__}, "
                "expected Event or None",
                detail={"middleware": describe(transform)},
            )
    return current


__all__ = [
    "Middleware",
    "Sink",
    "apply_middleware",
    "describe",
    "middleware",
    "validate_single_argument",
]
