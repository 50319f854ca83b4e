"""Events – severity levels and the level registry.

Built-in levels form a fixed, totally ordered set::

    LOWEST=0 < TRACE=10 < DEBUG=20 < NOTE=30 < MESSAGE=40
             < WARNING=60 < ERROR=80 < CRITICAL=90 < HIGHEST=100

``LOWEST`` and ``HIGHEST`` are virtual bounds used for limits. Custom levels
take a severity in ``[1, 99]`` and are the only levels that may carry
default tags::

    AUDIT = define_level("AUDIT", 70).with_tags("security")
    log(AUDIT("user promoted", user_id=42))

Levels compare by severity only, so two levels with equal severities are
equal whatever their names.
"""
from __future__ import annotations

import dataclasses
import functools
import threading
from collections.abc import Iterator
from datetime import datetime
from typing import Any

from logthis.events.event import Event, merge_tags
from logthis.kernel.contracts import require_that
from logthis.kernel.errors import ConfigurationError
from logthis.kernel.time import utc_now

SEVERITY_MIN = 0
SEVERITY_MAX = 100


@functools.total_ordering
@dataclasses.dataclass(frozen=True, eq=False)
class EventLevel:
    """A named severity that doubles as an :class:`Event` constructor."""

    name: str
    severity: int
    tags: tuple[str, ...] = ()
    builtin: bool = False

    def __post_init__(self) -> None:
        require_that(
            {
                "name must be a non-empty string": isinstance(self.name, str)
                and bool(self.name.strip()),
                "severity must be an integer": isinstance(self.severity, int)
                and not isinstance(self.severity, bool),
                "tags must be strings": all(isinstance(t, str) for t in self.tags),
            },
            where="EventLevel",
        )
        require_that(
            {
                "severity must be in [0, 100]": SEVERITY_MIN <= self.severity <= SEVERITY_MAX,
                "custom level severity must be in [1, 99]": self.builtin
                or SEVERITY_MIN < self.severity < SEVERITY_MAX,
            },
            where="EventLevel",
        )

    def __call__(
        self,
        message: str = "",
        *,
        tags: tuple[str, ...] | list[str] = (),
        timestamp: datetime | None = None,
        **fields: Any,
    ) -> Event:
        return Event(
            level=self,
            message=message,
            timestamp=timestamp or utc_now(),
            tags=merge_tags(self.tags, tags),
            fields=fields,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EventLevel):
            return NotImplemented
        return self.severity == other.severity

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, EventLevel):
            return NotImplemented
        return self.severity < other.severity

    def __hash__(self) -> int:
        return hash(self.severity)

    def __repr__(self) -> str:
        return f"EventLevel({self.name}={self.severity})"

    def with_tags(self, *tags: str, append: bool = True) -> "EventLevel":
        """Return a copy of this custom level carrying default *tags*.

        Raises :class:`ConfigurationError` for built-in levels.
        """
        if self.builtin:
            raise ConfigurationError(
                f"Cannot add tags to built-in level '{self.name}'; "
                "define a custom level with define_level() instead",
                detail={"level": self.name},
            )
        require_that(
            {"tags must be strings": all(isinstance(t, str) for t in tags)},
            where="EventLevel.with_tags",
        )
        combined = merge_tags(self.tags, tags) if append else merge_tags((), tags)
        return dataclasses.replace(self, tags=combined)


def attach_default_tags(level: EventLevel, *tags: str) -> EventLevel:
    """Functional spelling of :meth:`EventLevel.with_tags`."""
    return level.with_tags(*tags)


class LevelRegistry:
    """Name → level lookup, used to resolve limits given as level names."""

    def __init__(self) -> None:
        self._levels: dict[str, EventLevel] = {}
        self._lock = threading.Lock()
        self._builtins_registered = False

    def register(self, level: EventLevel) -> EventLevel:
        key = level.name.upper()
        with self._lock:
            existing = self._levels.get(key)
            if existing is not None:
                if existing.builtin and not level.builtin:
                    raise ConfigurationError(
                        f"'{level.name}' is a built-in level name",
                        detail={"level": level.name},
                    )
                if existing.severity != level.severity:
                    raise ConfigurationError(
                        f"Level '{level.name}' is already defined with severity "
                        f"{existing.severity}",
                        detail={"level": level.name, "severity": existing.severity},
                    )
            self._levels[key] = level
        return level

    def get(self, name: str) -> EventLevel:
        try:
            return self._levels[name.upper()]
        except KeyError:
            raise ConfigurationError(
                f"Unknown level '{name}'. Available: {', '.join(self.names())}",
                detail={"level": name},
            ) from None

    def names(self) -> list[str]:
        return [level.name for level in self]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.upper() in self._levels

    def __iter__(self) -> Iterator[EventLevel]:
        return iter(sorted(self._levels.values(), key=lambda lv: lv.severity))

    def __len__(self) -> int:
        return len(self._levels)


def _builtin(name: str, severity: int) -> EventLevel:
    return EventLevel(name=name, severity=severity, builtin=True)


LOWEST = _builtin("LOWEST", 0)
TRACE = _builtin("TRACE", 10)
DEBUG = _builtin("DEBUG", 20)
NOTE = _builtin("NOTE", 30)
MESSAGE = _builtin("MESSAGE", 40)
WARNING = _builtin("WARNING", 60)
ERROR = _builtin("ERROR", 80)
CRITICAL = _builtin("CRITICAL", 90)
HIGHEST = _builtin("HIGHEST", 100)

BUILTIN_LEVELS: tuple[EventLevel, ...] = (
    LOWEST, TRACE, DEBUG, NOTE, MESSAGE, WARNING, ERROR, CRITICAL, HIGHEST,
)


def register_builtins(registry: LevelRegistry) -> LevelRegistry:
    """Register the fixed built-in set once; later calls are no-ops."""
    if registry._builtins_registered:
        return registry
    for level in BUILTIN_LEVELS:
        registry.register(level)
    registry._builtins_registered = True
    return registry


default_registry = register_builtins(LevelRegistry())


def define_level(
    name: str,
    severity: int,
    *,
    registry: LevelRegistry | None = None,
) -> EventLevel:
    """Create and register a custom level.

    Raises :class:`ConfigurationError` when *severity* is outside ``[1, 99]``
    (0 and 100 are reserved for ``LOWEST`` / ``HIGHEST``).
    """
    require_that(
        {
            "name must be a non-empty string": isinstance(name, str) and bool(name.strip()),
            "severity must be an integer": isinstance(severity, int)
            and not isinstance(severity, bool),
        },
        where="define_level",
    )
    require_that(
        {"severity must be in [1, 99]": 1 <= severity <= 99},
        where="define_level",
    )
    level = EventLevel(name=name.strip(), severity=severity)
    return (registry or default_registry).register(level)


def resolve_level(
    value: EventLevel | str,
    *,
    registry: LevelRegistry | None = None,
) -> EventLevel:
    """Return *value* itself, or the registered level called *value*."""
    if isinstance(value, EventLevel):
        return value
    if not isinstance(value, str):
        raise ConfigurationError(
            f"Level must be an EventLevel or level name, not {type(value).__name__}"
        )
    return (registry or default_registry).get(value.strip())


def resolve_severity(
    value: int | EventLevel | str,
    *,
    registry: LevelRegistry | None = None,
) -> int:
    """Turn a level, level name or raw number into a severity."""
    if isinstance(value, EventLevel):
        return value.severity
    if isinstance(value, bool):
        raise ConfigurationError("Level must be an int, EventLevel or level name, not bool")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        if text.isdigit():
            return int(text)
        return (registry or default_registry).get(text).severity
    raise ConfigurationError(
        f"Level must be an int, EventLevel or level name, not {type(value).__name__}"
    )


__all__ = [
    "BUILTIN_LEVELS",
    "CRITICAL",
    "DEBUG",
    "ERROR",
    "EventLevel",
    "HIGHEST",
    "LOWEST",
    "LevelRegistry",
    "MESSAGE",
    "NOTE",
    "SEVERITY_MAX",
    "SEVERITY_MIN",
    "TRACE",
    "WARNING",
    "attach_default_tags",
    "default_registry",
    "define_level",
    "register_builtins",
    "resolve_level",
    "resolve_severity",
]
