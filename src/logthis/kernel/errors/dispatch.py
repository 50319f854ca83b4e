"""Dispatch errors – failures while delivering events to sinks."""

from __future__ import annotations

from typing import Any

from logthis.kernel.errors.base import LogthisError


class DispatchError(LogthisError):
    """A failure that happened while an event was being delivered."""

    default_code = "dispatch_error"


class ReceiverError(DispatchError):
    """A receiver's middleware, filter or sink raised.

    The logger catches it per receiver, so the remaining receivers still run.
    ``name``, ``index`` and ``label`` are filled in by the logger when the
    error crosses its isolation boundary.
    """

    default_code = "receiver_error"

    def __init__(
        self,
        message: str,
        *,
        name: str | None = None,
        index: int | None = None,
        label: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.name = name
        self.index = index
        self.label = label

    def locate(self, *, name: str, index: int, label: str) -> "ReceiverError":
        """Return a copy of this error tagged with the receiver's position."""
        return ReceiverError(
            self.message,
            name=name,
            index=index,
            label=label,
            code=self.code,
            detail=dict(self.detail),
            cause=self.cause,
        )

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base["receiver"] = {"name": self.name, "index": self.index, "label": self.label}
        return base


class AsyncDeliveryError(DispatchError):
    """A background batch delivery failed.

    Never raised on the producer's call stack; recorded on the buffer and
    logged through the diagnostics channel instead.
    """

    default_code = "async_delivery_error"

    def __init__(
        self,
        message: str,
        *,
        sink: str | None = None,
        batch_size: int = 0,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.sink = sink
        self.batch_size = batch_size

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base["sink"] = self.sink
        base["batch_size"] = self.batch_size
        return base


class BufferClosedError(DispatchError):
    """A record was enqueued on a buffer that has already been closed."""

    default_code = "buffer_closed"

    def __init__(self, sink: str | None = None, **kwargs: Any) -> None:
        super().__init__(f"Buffer '{sink or 'unnamed'}' is closed", **kwargs)
        self.sink = sink


__all__ = [
    "AsyncDeliveryError",
    "BufferClosedError",
    "DispatchError",
    "ReceiverError",
]
