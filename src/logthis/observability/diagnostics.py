"""Observability – side channel for failures the pipeline must not re-enter.

A failing receiver is reported twice: as a :class:`ReceiverFailureWarning`
through :mod:`warnings` (observable by the host program and by tests) and as
a structlog ``receiver.failed`` error event. Neither path goes back through
a :class:`~logthis.pipeline.logger.Logger`, so a broken sink cannot trigger
a recursive failure loop. A warning filter set to ``"error"`` is honoured
by logging the escalation rather than letting it abort dispatch.
"""
from __future__ import annotations

import warnings

from logthis.kernel.errors import AsyncDeliveryError, ReceiverError
from logthis.observability.logging.processors import get_logger

_log = get_logger(__name__)


class ReceiverFailureWarning(RuntimeWarning):
    """Emitted when a receiver raised during dispatch."""

    def __init__(self, error: ReceiverError) -> None:
        super().__init__(
            f"Receiver #{error.index} '{error.name}' failed: {error.message}"
            f" [receiver: {error.label}]"
        )
        self.error = error


class FlushFailureWarning(RuntimeWarning):
    """Emitted when a manual flush of a receiver raised."""


def _warn(warning: Warning, stacklevel: int) -> None:
    # Filters may escalate warnings to errors; dispatch must still continue.
    try:
        warnings.warn(warning, stacklevel=stacklevel + 1)
    except Exception as exc:
        _log.error(
            "diagnostics.warning_escalated",
            category=type(warning).__name__,
            warning=str(warning),
            error=repr(exc),
        )


def report_receiver_failure(error: ReceiverError) -> None:
    _log.error(
        "receiver.failed",
        receiver=error.name,
        index=error.index,
        label=error.label,
        error=error.message,
        tags=["receiver_error"],
    )
    _warn(ReceiverFailureWarning(error), stacklevel=3)


def report_flush_failure(name: str, exc: BaseException) -> None:
    _log.error("receiver.flush_failed", receiver=name, error=str(exc))
    _warn(FlushFailureWarning(f"Failed to flush receiver '{name}': {exc}"), stacklevel=3)


def report_delivery_failure(error: AsyncDeliveryError) -> None:
    """Background flushes only log; a warning would surface on a worker thread."""
    _log.error(
        "buffer.flush_failed",
        sink=error.sink,
        batch_size=error.batch_size,
        error=error.message,
        cause=repr(error.cause) if error.cause is not None else None,
    )


__all__ = [
    "FlushFailureWarning",
    "ReceiverFailureWarning",
    "report_delivery_failure",
    "report_flush_failure",
    "report_receiver_failure",
]
