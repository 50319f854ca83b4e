"""Observability – structlog processors and get_logger helper.

logthis reports its own trouble (failing receivers, failed background
flushes, dropped records) through structlog so it never loops back into the
pipeline that is failing.
"""
from __future__ import annotations

from typing import Any

import structlog


class ComponentProcessor:
    """structlog processor that stamps every diagnostic with its origin.

    Injects ``component="logthis"`` unless the event already names one, so
    host applications can route library diagnostics separately::

        structlog.configure(processors=[ComponentProcessor(), ...])
    """

    def __init__(self, component: str = "logthis") -> None:
        self._component = component

    def __call__(
        self,
        logger: Any,           # noqa: ARG002
        method_name: str,      # noqa: ARG002
        event_dict: dict[str, Any],
    ) -> dict[str, Any]:
        event_dict.setdefault("component", self._component)
        return event_dict


def get_logger(name: str | None = None, **initial_values: Any) -> Any:
    """Return a bound structlog logger.

    Parameters
    ----------
    name:
        Logger name (typically ``__name__`` of the calling module).
    **initial_values:
        Key-value pairs to bind on the returned logger.
    """
    logger = structlog.get_logger(name)
    if initial_values:
        logger = logger.bind(**initial_values)
    return logger


__all__ = ["ComponentProcessor", "get_logger"]
