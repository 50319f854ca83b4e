"""Testing generators – Hypothesis strategies for levels, tags and events.

Requires the ``hypothesis`` package:

    pip install "logthis[test]"
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from hypothesis.strategies import SearchStrategy  # type: ignore[import-untyped]

    from logthis.events import Event, EventLevel


def _require_hypothesis() -> Any:
    """Lazy import guard – raises a clear error when hypothesis is absent."""
    try:
        import hypothesis.strategies as st  # type: ignore[import-untyped]
        return st
    except ImportError as exc:
        raise ImportError(
            "Install 'hypothesis' to use property-based testing strategies: "
            "pip install hypothesis"
        ) from exc


def tag_strategy() -> "SearchStrategy[str]":
    st = _require_hypothesis()
    return st.text(alphabet="abcdefghijklmnopqrstuvwxyz_", min_size=1, max_size=8)


def tags_strategy(max_size: int = 6) -> "SearchStrategy[list[str]]":
    """Lists of tags, possibly with duplicates."""
    st = _require_hypothesis()
    return st.lists(tag_strategy(), max_size=max_size)


def severity_strategy() -> "SearchStrategy[int]":
    st = _require_hypothesis()
    return st.integers(min_value=0, max_value=100)


def level_strategy() -> "SearchStrategy[EventLevel]":
    """Built-in levels plus unregistered ad-hoc levels in ``[1, 99]``."""
    from logthis.events import BUILTIN_LEVELS, EventLevel

    st = _require_hypothesis()
    adhoc = st.integers(min_value=1, max_value=99).map(
        lambda s: EventLevel(name=f"LEVEL_{s}", severity=s)
    )
    return st.one_of(st.sampled_from(BUILTIN_LEVELS), adhoc)


def event_strategy() -> "SearchStrategy[Event]":
    """Events with arbitrary level, text message and tags.

    Example::

        @given(event_strategy())
        def test_void_logger_is_identity(event):
            assert void_logger()(event) is event
    """
    st = _require_hypothesis()
    return st.builds(
        lambda level, message, tags: level(message, tags=tags),
        level_strategy(),
        st.text(max_size=40),
        tags_strategy(),
    )


__all__ = [
    "event_strategy",
    "level_strategy",
    "severity_strategy",
    "tag_strategy",
    "tags_strategy",
]
