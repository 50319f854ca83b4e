"""Testing generators – property-based strategies."""
from logthis.testing.generators.strategies import (
    event_strategy,
    level_strategy,
    severity_strategy,
    tag_strategy,
    tags_strategy,
)

__all__ = [
    "event_strategy",
    "level_strategy",
    "severity_strategy",
    "tag_strategy",
    "tags_strategy",
]
