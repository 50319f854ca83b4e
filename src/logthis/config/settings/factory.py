"""Config settings – SettingsFactory."""
from __future__ import annotations

import dataclasses
from typing import Any, Sequence, TypeVar

from logthis.config.settings.base import Settings
from logthis.config.settings.loaders import SettingsLoader
from logthis.config.validation.errors import (
    ConfigError,
    MissingRequiredSettingError,
)
from logthis.observability.logging.processors import get_logger

T = TypeVar("T", bound=Settings)

_log = get_logger(__name__)


class SettingsFactory:
    """Merge outputs from multiple loaders, apply overrides, and construct
    a settings dataclass in one step.

    Loaders are applied in order; later loaders override earlier ones for
    overlapping fields.  *overrides* (if provided) take the highest priority.
    A loader that raises is logged and skipped so that the remaining loaders
    may still contribute values.
    """

    @staticmethod
    def create(
        settings_cls: type[T],
        loaders: Sequence[SettingsLoader] | None = None,
        overrides: dict[str, Any] | None = None,
    ) -> T:
        """
        Parameters
        ----------
        settings_cls:
            The :class:`~logthis.config.settings.base.Settings` subclass to
            construct.
        loaders:
            Ordered sequence of :class:`~logthis.config.settings.loaders.\
SettingsLoader` instances.  Later loaders win on field conflicts.
        overrides:
            Explicit key-value pairs applied after all loaders, useful for
            tests and local development.

        Raises
        ------
        MissingRequiredSettingError
            When a required field (no default) is absent after all sources
            have been merged.
        InvalidSettingValueError
            When the merged values fail the settings' own validation.
        ConfigError
            On any other construction failure.
        """
        merged: dict[str, Any] = {}

        for loader in loaders or []:
            try:
                instance = loader.load(settings_cls)
            except Exception as exc:  # noqa: BLE001
                _log.warning(
                    "settings.loader_skipped",
                    loader=type(loader).__name__,
                    settings=settings_cls.__name__,
                    error=str(exc),
                )
                continue
            for field in dataclasses.fields(instance):  # type: ignore[arg-type]
                merged[field.name] = getattr(instance, field.name)

        if overrides:
            merged.update(overrides)

        for field in dataclasses.fields(settings_cls):  # type: ignore[arg-type]
            if field.name in merged:
                continue
            if (
                field.default is dataclasses.MISSING
                and field.default_factory is dataclasses.MISSING  # type: ignore[misc]
            ):
                raise MissingRequiredSettingError(field.name)

        try:
            return settings_cls(**merged)
        except ConfigError:
            raise
        except Exception as exc:
            raise ConfigError(f"Failed to construct {settings_cls.__name__}: {exc}", cause=exc) from exc


__all__ = ["SettingsFactory"]
