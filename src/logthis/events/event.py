"""Events – the immutable record produced by every log call."""
from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Mapping
from datetime import datetime
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from logthis.kernel.contracts import check_invariant, require_that
from logthis.kernel.time import utc_now

if TYPE_CHECKING:
    from logthis.events.levels import EventLevel


def merge_tags(existing: Iterable[str], extra: Iterable[str]) -> tuple[str, ...]:
    """Ordered set union: *existing* first, then tags of *extra* not yet present."""
    merged: dict[str, None] = dict.fromkeys(existing)
    for tag in extra:
        merged.setdefault(tag, None)
    return tuple(merged)


@dataclasses.dataclass(frozen=True)
class Event:
    """One log record.

    Events are built by calling an :class:`~logthis.events.levels.EventLevel`
    (``WARNING("disk almost full", free_mb=12)``) and are never mutated:
    every ``with_*`` method returns a new event.

    ``tags`` is an insertion-ordered, de-duplicated tuple and ``fields`` a
    read-only mapping of arbitrary values.
    """

    level: EventLevel
    message: str
    timestamp: datetime = dataclasses.field(default_factory=utc_now)
    tags: tuple[str, ...] = ()
    fields: Mapping[str, Any] = dataclasses.field(default_factory=dict)

    def __post_init__(self) -> None:
        require_that(
            {
                "message must be a string": isinstance(self.message, str),
                "tags must be strings": all(isinstance(t, str) for t in self.tags),
                "field names must be strings": all(isinstance(k, str) for k in self.fields),
            },
            where="Event",
        )
        object.__setattr__(self, "tags", merge_tags((), self.tags))
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))
        check_invariant(
            {
                "severity must be in [0, 100]": 0 <= self.level.severity <= 100,
                "timestamp must be set": isinstance(self.timestamp, datetime),
            },
            where="Event",
        )

    @property
    def severity(self) -> int:
        return self.level.severity

    @property
    def level_name(self) -> str:
        return self.level.name

    def with_tags(self, *tags: str) -> "Event":
        """Return a copy with *tags* merged after the existing ones."""
        return dataclasses.replace(self, tags=merge_tags(self.tags, tags))

    def with_fields(self, **fields: Any) -> "Event":
        """Return a copy with *fields* added (or overriding existing keys)."""
        return dataclasses.replace(self, fields={**self.fields, **fields})

    def with_message(self, message: str) -> "Event":
        return dataclasses.replace(self, message=message)

    def to_dict(self) -> dict[str, Any]:
        """Plain-dict view, handy for formatters."""
        return {
            "timestamp": self.timestamp.isoformat(),
            "level": self.level.name,
            "severity": self.level.severity,
            "message": self.message,
            "tags": list(self.tags),
            **self.fields,
        }


__all__ = ["Event", "merge_tags"]
