"""Unit tests for event levels and the level registry."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from logthis.events import (
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
    Event,
    EventLevel,
    LevelRegistry,
    attach_default_tags,
    define_level,
    register_builtins,
    resolve_level,
    resolve_severity,
)
from logthis.kernel.errors import ConfigurationError


@pytest.fixture
def registry() -> LevelRegistry:
    return register_builtins(LevelRegistry())


# ---------------------------------------------------------------------------
# Built-in set
# ---------------------------------------------------------------------------


class TestBuiltins:
    def test_severities(self) -> None:
        assert [lv.severity for lv in BUILTIN_LEVELS] == [0, 10, 20, 30, 40, 60, 80, 90, 100]

    def test_total_order(self) -> None:
        assert LOWEST < TRACE < DEBUG < NOTE < MESSAGE < WARNING < ERROR < CRITICAL < HIGHEST

    def test_all_flagged_builtin(self) -> None:
        assert all(lv.builtin for lv in BUILTIN_LEVELS)

    def test_calling_a_level_builds_an_event(self) -> None:
        event = WARNING("disk almost full", free_mb=12)
        assert isinstance(event, Event)
        assert event.level is WARNING
        assert event.message == "disk almost full"
        assert event.fields["free_mb"] == 12

    def test_builtin_rejects_default_tags(self) -> None:
        with pytest.raises(ConfigurationError, match="built-in"):
            WARNING.with_tags("ops")

    def test_attach_default_tags_rejects_builtin(self) -> None:
        with pytest.raises(ConfigurationError):
            attach_default_tags(ERROR, "ops")


# ---------------------------------------------------------------------------
# Comparison semantics
# ---------------------------------------------------------------------------


class TestComparison:
    def test_equal_severity_means_equal(self) -> None:
        assert EventLevel("A", 42) == EventLevel("B", 42)
        assert hash(EventLevel("A", 42)) == hash(EventLevel("B", 42))

    def test_ordering_by_severity(self) -> None:
        assert EventLevel("LOW", 5) < EventLevel("HIGH", 6)
        assert EventLevel("HIGH", 6) >= EventLevel("ALSO_HIGH", 6)

    def test_not_equal_to_int(self) -> None:
        assert EventLevel("A", 42) != 42

    @given(st.integers(0, 100), st.integers(0, 100))
    def test_order_matches_severity(self, a: int, b: int) -> None:
        left, right = EventLevel("A", a, builtin=True), EventLevel("B", b, builtin=True)
        assert (left < right) == (a < b)
        assert (left == right) == (a == b)


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


class TestConstruction:
    @pytest.mark.parametrize("severity", [0, 100, -1, 101, 150])
    def test_custom_level_outside_custom_range(self, severity: int) -> None:
        with pytest.raises(ConfigurationError, match="EventLevel"):
            EventLevel("BROKEN", severity)

    @pytest.mark.parametrize("severity", [-1, 101])
    def test_builtin_level_outside_bounds(self, severity: int) -> None:
        with pytest.raises(ConfigurationError, match=r"\[0, 100\]"):
            EventLevel("BROKEN", severity, builtin=True)

    def test_builtin_bounds_accepted(self) -> None:
        assert EventLevel("FLOOR", 0, builtin=True).severity == 0
        assert EventLevel("CEILING", 100, builtin=True).severity == 100

    @pytest.mark.parametrize("severity", [50.5, "50", True])
    def test_severity_must_be_an_integer(self, severity: object) -> None:
        with pytest.raises(ConfigurationError, match="integer"):
            EventLevel("BROKEN", severity)  # type: ignore[arg-type]

    @pytest.mark.parametrize("name", ["", "   ", 7])
    def test_name_must_be_non_empty(self, name: object) -> None:
        with pytest.raises(ConfigurationError, match="name"):
            EventLevel(name, 50)  # type: ignore[arg-type]

    def test_tags_must_be_strings(self) -> None:
        with pytest.raises(ConfigurationError, match="tags"):
            EventLevel("CUSTOM", 50, tags=(1,))  # type: ignore[arg-type]

    def test_with_tags_revalidates(self) -> None:
        with pytest.raises(ConfigurationError, match="tags"):
            EventLevel("CUSTOM", 50).with_tags(3)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Custom levels
# ---------------------------------------------------------------------------


class TestDefineLevel:
    def test_registers_and_resolves_by_name(self, registry: LevelRegistry) -> None:
        audit = define_level("AUDIT", 70, registry=registry)
        assert registry.get("audit") is audit
        assert resolve_severity("AUDIT", registry=registry) == 70

    def test_sorted_iteration(self, registry: LevelRegistry) -> None:
        define_level("AUDIT", 70, registry=registry)
        names = registry.names()
        assert names.index("WARNING") < names.index("AUDIT") < names.index("ERROR")

    @pytest.mark.parametrize("severity", [0, 100, -1, 101])
    def test_severity_outside_custom_range(self, registry: LevelRegistry, severity: int) -> None:
        with pytest.raises(ConfigurationError, match=r"\[1, 99\]"):
            define_level("BAD", severity, registry=registry)

    def test_builtin_name_cannot_be_redefined(self, registry: LevelRegistry) -> None:
        with pytest.raises(ConfigurationError, match="built-in"):
            define_level("warning", 61, registry=registry)

    def test_redefinition_with_other_severity_fails(self, registry: LevelRegistry) -> None:
        define_level("AUDIT", 70, registry=registry)
        with pytest.raises(ConfigurationError, match="already defined"):
            define_level("AUDIT", 71, registry=registry)

    def test_redefinition_with_same_severity_is_allowed(self, registry: LevelRegistry) -> None:
        define_level("AUDIT", 70, registry=registry)
        assert define_level("AUDIT", 70, registry=registry).severity == 70

    def test_non_integer_severity(self, registry: LevelRegistry) -> None:
        with pytest.raises(ConfigurationError):
            define_level("X", 50.5, registry=registry)  # type: ignore[arg-type]

    def test_default_tags_on_custom_level(self, registry: LevelRegistry) -> None:
        audit = define_level("AUDIT", 70, registry=registry).with_tags("security")
        event = audit("user promoted", tags=["users", "security"])
        assert event.tags == ("security", "users")

    def test_with_tags_replace(self) -> None:
        level = EventLevel("CUSTOM", 55).with_tags("a").with_tags("b", append=False)
        assert level.tags == ("b",)

    def test_register_builtins_idempotent(self, registry: LevelRegistry) -> None:
        size = len(registry)
        register_builtins(registry)
        assert len(registry) == size


# ---------------------------------------------------------------------------
# resolve_severity
# ---------------------------------------------------------------------------


class TestResolveSeverity:
    def test_accepts_levels_names_numbers(self) -> None:
        assert resolve_severity(ERROR) == 80
        assert resolve_severity("note") == 30
        assert resolve_severity(" 45 ") == 45
        assert resolve_severity(12) == 12

    def test_unknown_name(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown level"):
            resolve_severity("VERBOSE")

    def test_bool_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            resolve_severity(True)

    def test_other_types_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            resolve_severity(1.5)  # type: ignore[arg-type]


class TestResolveLevel:
    def test_by_name(self, registry: LevelRegistry) -> None:
        audit = define_level("AUDIT", 70, registry=registry)
        assert resolve_level(" audit ", registry=registry) is audit

    def test_passes_levels_through(self) -> None:
        assert resolve_level(ERROR) is ERROR

    def test_rejects_numbers(self) -> None:
        with pytest.raises(ConfigurationError):
            resolve_level(80)  # type: ignore[arg-type]
