"""Events – severity levels and the immutable event record."""
from logthis.events.event import Event, merge_tags
from logthis.events.levels import (
    BUILTIN_LEVELS,
    CRITICAL,
    DEBUG,
    ERROR,
    HIGHEST,
    LOWEST,
    MESSAGE,
    NOTE,
    TRACE,
    WARNING,
    EventLevel,
    LevelRegistry,
    attach_default_tags,
    default_registry,
    define_level,
    register_builtins,
    resolve_level,
    resolve_severity,
)

__all__ = [
    "BUILTIN_LEVELS",
    "CRITICAL",
    "DEBUG",
    "ERROR",
    "Event",
    "EventLevel",
    "HIGHEST",
    "LOWEST",
    "LevelRegistry",
    "MESSAGE",
    "NOTE",
    "TRACE",
    "WARNING",
    "attach_default_tags",
    "default_registry",
    "define_level",
    "merge_tags",
    "register_builtins",
    "resolve_level",
    "resolve_severity",
]
