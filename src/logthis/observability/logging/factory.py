"""Observability – DiagnosticsConfigurator."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import structlog

from logthis.observability.logging.filters import SensitiveFieldsFilter
from logthis.observability.logging.processors import ComponentProcessor

if TYPE_CHECKING:
    from logthis.config.settings import LogthisSettings


class DiagnosticsConfigurator:
    """Configure structlog for logthis diagnostics (console or JSON output)."""

    @staticmethod
    def configure(
        level: int | str = logging.WARNING,
        *,
        json: bool = False,
        sensitive_fields: frozenset[str] | None = None,
    ) -> None:
        if isinstance(level, str):
            level = logging.getLevelName(level.upper())
            if not isinstance(level, int):
                level = logging.WARNING

        shared_processors: list[Any] = [
            structlog.contextvars.merge_contextvars,
            ComponentProcessor(),
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
        ]
        if sensitive_fields:
            _filter = SensitiveFieldsFilter(sensitive_fields)

            def _redact(logger: Any, method: Any, event_dict: dict[str, Any]) -> dict[str, Any]:  # noqa: ARG001
                return _filter.redact_deep(event_dict)

            shared_processors.insert(0, _redact)

        structlog.configure(
            processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        renderer: Any = (
            structlog.processors.JSONRenderer() if json else structlog.dev.ConsoleRenderer(colors=False)
        )
        formatter = structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
        handler = logging.StreamHandler()
        handler.setFormatter(formatter)
        diagnostics = logging.getLogger("logthis")
        diagnostics.handlers.clear()
        diagnostics.addHandler(handler)
        diagnostics.setLevel(level)
        diagnostics.propagate = False

    @classmethod
    def from_settings(cls, settings: LogthisSettings, *, json: bool = False) -> None:
        cls.configure(settings.diagnostics_level, json=json)


__all__ = ["DiagnosticsConfigurator"]
