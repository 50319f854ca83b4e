"""Testing support – fakes and property-based generators.

Example::

    from logthis.testing import GatedDeliver, RecordingSink
"""

from logthis.testing.fakes import FailingSink, FakeClock, FrozenClock, GatedDeliver, RecordingSink
from logthis.testing.generators import (
    event_strategy,
    level_strategy,
    severity_strategy,
    tag_strategy,
    tags_strategy,
)

__all__ = [
    "FailingSink",
    "FakeClock",
    "FrozenClock",
    "GatedDeliver",
    "RecordingSink",
    "event_strategy",
    "level_strategy",
    "severity_strategy",
    "tag_strategy",
    "tags_strategy",
]
