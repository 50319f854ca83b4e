"""Config settings – Settings base class and LogthisSettings."""
from __future__ import annotations

import dataclasses
import logging

from logthis.buffering.policy import BackpressurePolicy
from logthis.config.validation.errors import InvalidSettingValueError
from logthis.events import resolve_severity
from logthis.kernel.errors import ConfigurationError


@dataclasses.dataclass
class Settings:
    """Base class for 12-factor settings."""

    _prefix: dataclasses.ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Override to add cross-field validation."""


@dataclasses.dataclass
class LogthisSettings(Settings):
    """Buffering, limits and diagnostics defaults, read from ``LOGTHIS_*``.

    ``flush_interval`` of ``0`` disables the time trigger and
    ``async_workers`` of ``0`` keeps buffered flushes on the caller's thread.
    ``lower`` / ``upper`` accept a level name or a number.
    """

    _prefix: dataclasses.ClassVar[str] = "LOGTHIS"

    flush_threshold: int = 100
    max_queue_size: int = 10_000
    flush_interval: float = 0.0
    backpressure: str = BackpressurePolicy.BLOCK.value
    async_workers: int = 0
    lower: str = "LOWEST"
    upper: str = "HIGHEST"
    diagnostics_level: str = "WARNING"

    def _validate(self) -> None:
        if self.flush_threshold < 1:
            raise InvalidSettingValueError("flush_threshold", self.flush_threshold, "must be >= 1")
        if self.max_queue_size < self.flush_threshold:
            raise InvalidSettingValueError(
                "max_queue_size", self.max_queue_size, "must be >= flush_threshold"
            )
        if self.flush_interval < 0:
            raise InvalidSettingValueError("flush_interval", self.flush_interval, "must be >= 0")
        if self.async_workers < 0:
            raise InvalidSettingValueError("async_workers", self.async_workers, "must be >= 0")
        try:
            self.backpressure = BackpressurePolicy.parse(self.backpressure).value
        except ConfigurationError as exc:
            raise InvalidSettingValueError("backpressure", self.backpressure, exc.message) from exc

        bounds: dict[str, int] = {}
        for field_name, valid in (("lower", range(0, 100)), ("upper", range(1, 101))):
            raw = getattr(self, field_name)
            try:
                severity = resolve_severity(raw)
            except ConfigurationError as exc:
                raise InvalidSettingValueError(field_name, raw, exc.message) from exc
            if severity not in valid:
                raise InvalidSettingValueError(
                    field_name, raw, f"severity must be in [{valid.start}, {valid.stop - 1}]"
                )
            bounds[field_name] = severity
        if bounds["lower"] > bounds["upper"]:
            raise InvalidSettingValueError("lower", self.lower, "must not exceed upper")

        if not isinstance(logging.getLevelName(self.diagnostics_level.upper()), int):
            raise InvalidSettingValueError(
                "diagnostics_level", self.diagnostics_level, "not a logging level name"
            )


__all__ = ["LogthisSettings", "Settings"]
